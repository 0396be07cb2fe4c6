from dataclasses import dataclass


@dataclass(slots=True)
class Banner:
    """Transient message (e.g. ``LEVEL 3``) cleared by the tick once ``remaining`` runs out."""
    text: str = ""
    remaining: float = 0.0

    @property
    def visible(self) -> bool:
        return bool(self.text)
