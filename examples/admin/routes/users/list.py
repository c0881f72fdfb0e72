def respond_admin(request, response, next):
    response.json({"users": request.preloaded["users"], "me": request.preloaded["currentUser"]})


def respond_member(request, response, next):
    response.json({"me": request.preloaded["currentUser"]})


routes = [
    {
        "path": "/users",
        "method": "GET",
        "respond": respond_member,
        "conditions": ["isAuthenticated"],
        "preload": ["currentUser"],
    },
    {
        "path": "/users",
        "method": "GET",
        "respond": respond_admin,
        "conditions": ["isAuthenticated", "isAdmin"],
        "preload": ["currentUser", "users"],
    },
]
