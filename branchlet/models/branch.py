"""Branch model"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Branch:
    """A branch as reported by git at listing time.

    Remote branches are named "<remote>/<branch>".
    """
    name: str
    is_remote: bool = False
    is_current: bool = False

    @property
    def remote_name(self) -> str:
        """Remote part of a remote branch name, empty for local branches."""
        if not self.is_remote or "/" not in self.name:
            return ""
        return self.name.split("/", 1)[0]

    @property
    def is_remote_head(self) -> bool:
        """True for the "<remote>/HEAD" alias."""
        return self.is_remote and self.name.endswith("/HEAD")
