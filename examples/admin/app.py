"""Admin area — conditions, preloading and validation from route files.

Route definitions live in ``routes/``; this file registers the named
conditionals and preloaders they reference and mounts them on a host.

Run:
    wren routes examples/admin/routes
"""

from pathlib import Path

import anyio

from wren import Pipeline, PipelineConfig, PreloadMode

USERS = {
    "1": {"id": "1", "name": "Ada", "role": "admin"},
    "2": {"id": "2", "name": "Linus", "role": "user"},
}

pipeline = Pipeline.isolated(PipelineConfig(preload_mode=PreloadMode.SEQUENTIAL))


@pipeline.conditional("isAuthenticated")
def is_authenticated(request):
    return request.header("authorization") in USERS


@pipeline.conditional("isAdmin")
def is_admin(request):
    user = USERS.get(request.header("authorization") or "")
    return user is not None and user["role"] == "admin"


@pipeline.preloader("currentUser")
async def current_user(request):
    await anyio.sleep(0)
    return USERS[request.header("authorization")]


@pipeline.preloader("users")
def all_users(request):
    return sorted(USERS.values(), key=lambda u: u["id"])


pipeline.load(Path(__file__).parent / "routes")
