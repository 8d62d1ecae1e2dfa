"""JSON file persistence for the current OAuth token set."""

import json
from pathlib import Path

from ytrelay.exceptions import PersistenceWarning
from ytrelay.schemas.auth import TokenSet


class TokenStore:
    """Persist a single TokenSet in a JSON file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> TokenSet | None:
        """
        Read the stored token set.

        Returns:
            The stored TokenSet, or None if no file exists

        Raises:
            PersistenceWarning: If the file cannot be read or parsed
        """
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return TokenSet.model_validate(data)
        except (OSError, ValueError) as e:
            raise PersistenceWarning(f"Could not read {self.path}: {e}") from e

    def save(self, token_set: TokenSet) -> None:
        """Overwrite the file with ``token_set``."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(token_set.model_dump(exclude_none=True), indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            raise PersistenceWarning(f"Could not write {self.path}: {e}") from e
