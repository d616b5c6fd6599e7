from dataclasses import dataclass, field


@dataclass
class UserContextDto:
    """Identity taken from a verified bearer token."""

    sub: str
    primary_email: str
    # Provider role claims, not the application role of the profile.
    roles: list[str] = field(default_factory=list)

    def has_role(self, role: str) -> bool:
        return role in self.roles
