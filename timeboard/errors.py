from fastapi import HTTPException

# raised from services as well as routes; fastapi renders them as {"detail": ...}

class NotFound(HTTPException):
    def __init__(self, detail: str = "not found"):
        super().__init__(status_code=404, detail=detail)

class Forbidden(HTTPException):
    def __init__(self, detail: str = "forbidden"):
        super().__init__(status_code=403, detail=detail)

class Conflict(HTTPException):
    def __init__(self, detail: str = "conflict"):
        super().__init__(status_code=409, detail=detail)

class Unauthorized(HTTPException):
    def __init__(self, detail: str = "unauthorized"):
        super().__init__(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})
