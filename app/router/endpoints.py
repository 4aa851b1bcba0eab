"""
API Router - all endpoints.

MOUNTS is the routing table: every sub-router and the prefix it is served
under. It is checked for duplicate (method, path) pairs before anything is
included, so a clash fails at import.
"""
from typing import Iterable, Set, Tuple
from fastapi import APIRouter
from fastapi.routing import APIRoute
from app.router.api import auth, users, templates, nfc_postcards, meetup_photos

API_PREFIX = "/api"

MOUNTS = [
    ("/users", users.router, "Users"),
    ("/templates", templates.router, "Templates"),
    ("/nfc-postcards", nfc_postcards.router, "NFC Postcards"),
    ("/meetup-photos", meetup_photos.router, "Meetup Photos"),
    ("/auth", auth.router, "Authentication"),
]


def route_table(mounts: Iterable[Tuple[str, APIRouter, str]], prefix: str = API_PREFIX) -> Set[Tuple[str, str]]:
    """
    Every (method, full path) the mounts serve.

    Raises:
        RuntimeError: two handlers claim the same method and path
    """
    seen: Set[Tuple[str, str]] = set()
    for mount_prefix, router, _ in mounts:
        for route in router.routes:
            if not isinstance(route, APIRoute):
                continue
            path = f"{prefix}{mount_prefix}{route.path}"
            for method in route.methods:
                if (method, path) in seen:
                    raise RuntimeError(f"Duplicate route registered: {method} {path}")
                seen.add((method, path))
    return seen


ROUTES = route_table(MOUNTS)

api_router = APIRouter(prefix=API_PREFIX)
for mount_prefix, router, tag in MOUNTS:
    api_router.include_router(router, prefix=mount_prefix, tags=[tag])
