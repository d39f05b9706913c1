from enum import Enum

class Role(str, Enum):
    owner = "OWNER"
    admin = "ADMIN"
    manager = "MANAGER"
    team_member = "TEAM_MEMBER"
    client = "CLIENT"

class ProjectStatus(str, Enum):
    planned = "PLANNED"
    active = "ACTIVE"
    on_hold = "ON_HOLD"
    completed = "COMPLETED"
    cancelled = "CANCELLED"

# declaration order is the lane order of the board
class TaskStatus(str, Enum):
    todo = "TODO"
    in_progress = "IN_PROGRESS"
    in_review = "IN_REVIEW"
    done = "DONE"

class Priority(str, Enum):
    low = "LOW"
    medium = "MEDIUM"
    high = "HIGH"
    urgent = "URGENT"
