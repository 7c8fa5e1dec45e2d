"""sitecontext — data-query and pagination functions for static-site templates."""

__version__ = "0.1.0"

CMS_VERSION = "v2"
