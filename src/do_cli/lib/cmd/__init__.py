"""
Command implementations for do-cli
"""

from .account import account_info_command
from .droplets import (
    list_command,
    get_command,
    create_command,
    delete_command
)
from .configure import config_set_command, config_get_command

__all__ = [
    'account_info_command',
    'list_command',
    'get_command',
    'create_command',
    'delete_command',
    'config_set_command',
    'config_get_command'
]
