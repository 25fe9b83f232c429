from __future__ import annotations

from flask_caching import Cache
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_wtf import CSRFProtect

from blogdesk.utils.http_client import RemoteStore

remote: RemoteStore = RemoteStore()
login_manager: LoginManager = LoginManager()
csrf: CSRFProtect = CSRFProtect()
cache: Cache = Cache()

# Rate limiter (IP-based)
limiter: Limiter = Limiter(key_func=get_remote_address, default_limits=["100 per minute"])
