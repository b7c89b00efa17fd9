"""
Provisioning modules.
"""
