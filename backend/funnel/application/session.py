from dataclasses import dataclass


@dataclass(frozen=True)
class SessionContext:
    """
    Who is acting. Built once per request from the bearer token and passed
    explicitly into every application function.
    """
    user_id: str
    is_platform_admin: bool = False
