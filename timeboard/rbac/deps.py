from fastapi import Depends

from timeboard.auth.deps import Identity, get_identity
from timeboard.errors import Forbidden
from timeboard.rbac.perms import PERMS

def require_perm(action: str):
    allowed = PERMS.get(action)
    if allowed is None:
        raise RuntimeError(f"unknown permission action: {action}")

    def _checker(ident: Identity = Depends(get_identity)) -> Identity:
        if ident.role not in allowed:
            raise Forbidden("forbidden")
        return ident

    return _checker
