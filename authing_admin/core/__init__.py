"""Core client logic.

Module Structure:
    - management/ : Authing management API client (transport, token cache, services)

Import explicitly when needed:
    from authing_admin.core.management import ManagementClient, UserService
"""
