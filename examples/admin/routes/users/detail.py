from wren.validation import integer, required


def validate(request, response):
    request.check({"id": [required, integer]}, location="query")


def respond(request, response, next):
    response.json({"id": int(request.query["id"])})


route = {
    "path": "/users/detail",
    "method": "GET",
    "conditions": ["isAuthenticated"],
    "validate": validate,
    "respond": respond,
}
