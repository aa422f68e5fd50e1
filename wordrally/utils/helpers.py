"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional
from flask import request


def get_user_identity(request_obj=None, player_id: Optional[str] = None) -> Dict[str, Optional[str]]:
    """Extract user identity information from request."""
    if request_obj is None:
        request_obj = request
        
    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'
    
    return {
        'user_ip': user_ip,
        'player_id': player_id
    }


def parse_word_length(value, default: int) -> int:
    """Read a word length from request data, which may send it as a string."""
    if value is None or value == '':
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Word length must be a number, got {value!r}")
