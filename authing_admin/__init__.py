"""Authing management client package.

To use the management API:
    from authing_admin.core.management import ManagementClient, UserService

To load configuration from the environment:
    from authing_admin.config import load_settings
"""

__version__ = "0.3.0"
