"""Cross-cutting pieces shared by the domain apps.

Holds the file storage client, the ownership permission applied to every
mutating endpoint and the API exception handler.
"""
