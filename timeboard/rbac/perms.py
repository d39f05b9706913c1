from timeboard.models.enums import Role

_STAFF = {Role.owner, Role.admin, Role.manager, Role.team_member}
_MANAGERS = {Role.owner, Role.admin, Role.manager}
_EVERYONE = _STAFF | {Role.client}

PERMS: dict[str, set[Role]] = {
    "org:view": _EVERYONE,
    "org:update": {Role.owner, Role.admin},

    "users:read": _EVERYONE,
    "users:create": {Role.owner, Role.admin},

    "clients:create": _MANAGERS,
    "clients:read": _STAFF,
    "clients:update": _MANAGERS,
    "clients:delete": {Role.owner, Role.admin},

    "projects:create": _MANAGERS,
    "projects:read": _EVERYONE,
    "projects:update": _MANAGERS,
    "projects:delete": {Role.owner, Role.admin},

    "tasks:create": _STAFF,
    "tasks:read": _EVERYONE,
    "tasks:update": _STAFF,
    "tasks:delete": _MANAGERS,

    "timesheets:create": _STAFF,
    "timesheets:read": _STAFF,
    "timesheets:update": _STAFF,
    "timesheets:delete": _STAFF,
}

# which roles a creator may hand out when adding users
GRANTABLE_ROLES: dict[Role, set[Role]] = {
    Role.owner: {Role.admin, Role.manager, Role.team_member, Role.client},
    Role.admin: {Role.manager, Role.team_member, Role.client},
}
