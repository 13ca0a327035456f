"""
Global config facade: delegates to userapi.core.settings.
Prefer importing get_settings() or Settings from userapi.core in new code.
"""
from pathlib import Path

from userapi.core.settings import get_settings

_s = get_settings()

# Paths
BASE_DIR: Path = _s.base_dir

# Server
HOST: str = _s.host
PORT: int = _s.port

# Ops
LOG_FILE: str = _s.log_file
LOG_LEVEL: str = _s.log_level
