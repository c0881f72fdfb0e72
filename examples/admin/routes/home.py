path = "/"
method = ["GET", "HEAD"]


def respond(request, response, next):
    response.send("Welcome")
