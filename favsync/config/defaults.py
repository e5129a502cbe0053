# favsync Default Configuration
# Default configuration as Python dict and YAML generator

from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "interval": 3600,
    "credential": {
        "sessdata": "",
        "bili_jct": "",
        "buvid3": "",
        "dedeuserid": "",
        "ac_time_value": "",
    },
    "smtp": {
        "url": "smtps://smtp.example.com:465",
        "sender_email": "sender@example.com",
        "sender_password": "null",
        "recipient_email": "recipient@example.com",
    },
    "favorite_list": {
        "1234567890": "./favorites/default",
    },
    "client": {
        "binary": "fav",
        "timeout": None,
    },
    "output": {
        "verbose": False,
        "colored": True,
        "log_file": None,
    },
}


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# favsync configuration
#
# interval:       seconds to sleep between sync rounds (must be > 0)
# credential:     Bilibili cookies copied from a logged-in browser session
# smtp:           alert channel for expired sessions; set sender_password
#                 to null or leave it empty to disable email
# favorite_list:  favorite list id -> local directory (quote the ids)
# client:         fav executable and optional per-call timeout

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
