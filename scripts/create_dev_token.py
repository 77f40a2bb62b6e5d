"""Print a signed bearer token for local API calls.

Usage:
    python -m scripts.create_dev_token <actor_id> [role] [capability ...]
role defaults to 'team'. Extra arguments are explicit capability codes
(e.g. task:approve, workflow:*). Uses SECRET_KEY from the environment/.env.
"""

import sys

from sopflow.domain.enums import Capability
from sopflow.infrastructure.security import create_access_token


def main() -> None:
    if len(sys.argv) < 2:
        print(
            "Usage: python -m scripts.create_dev_token <actor_id> [role] [capability ...]",
            file=sys.stderr,
        )
        sys.exit(1)
    actor_id = sys.argv[1]
    role = sys.argv[2] if len(sys.argv) > 2 else "team"
    permissions = sys.argv[3:]

    resources = {c.resource for c in Capability} | {"*"}
    for code in permissions:
        resource, _, action = code.partition(":")
        if code not in Capability.values() and not (resource in resources and action == "*"):
            print(f"Unknown capability: {code}", file=sys.stderr)
            sys.exit(1)

    claims: dict[str, object] = {"sub": actor_id, "role": role}
    if permissions:
        claims["permissions"] = permissions
    print(create_access_token(claims))


if __name__ == "__main__":
    main()
