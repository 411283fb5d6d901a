"""Route access policy.

Every unauthenticated route is listed in one table, so the open surface can be
reviewed in one place. Rules are checked in order; the first match decides.
Anything no rule matches requires HTTP Basic credentials.
"""

from dataclasses import dataclass

from usermgmt.config import Settings, settings

ANY_METHOD = frozenset()


@dataclass(frozen=True)
class AccessRule:
    path_prefix: str
    public: bool
    methods: frozenset[str] = ANY_METHOD

    def matches(self, method: str, path: str) -> bool:
        if self.methods and method.upper() not in self.methods:
            return False
        return path == self.path_prefix or path.startswith(self.path_prefix.rstrip("/") + "/")


def build_access_rules(config: Settings) -> list[AccessRule]:
    return [
        AccessRule("/health", public=True, methods=frozenset({"GET", "HEAD"})),
        AccessRule("/swagger-ui", public=True),
        AccessRule("/api-docs", public=True),
        AccessRule("/redoc", public=True),
        AccessRule("/api/users", public=config.users_api_public),
    ]


def is_public(method: str, path: str, rules: list[AccessRule] | None = None) -> bool:
    for rule in rules if rules is not None else build_access_rules(settings):
        if rule.matches(method, path):
            return rule.public
    return False
