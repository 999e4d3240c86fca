"""Users app package.

Defines the custom user model (email login) and the token endpoints that
identify callers for every other app. Use ``apps.users.models.CustomUser``
as the AUTH_USER_MODEL throughout the project.
"""
