from rest_framework.routers import SimpleRouter


class OptionalSlashRouter(SimpleRouter):
    """Routes match with or without a trailing slash, as the mobile client mixes both"""

    def __init__(self):
        super().__init__()
        self.trailing_slash = "/?"
