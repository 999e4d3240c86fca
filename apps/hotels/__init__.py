"""Hotels app package.

This app encapsulates hotel and room listings: the models, public search,
host management of their own listings and clean-up of uploaded pictures.
"""
