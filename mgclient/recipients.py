"""A recipient written as 'Name <address>' or a bare address."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Recipient:
    """A display name and an e-mail address."""

    name: str = ""
    email: str = ""

    @classmethod
    def parse(cls, text):
        """Read 'Name <address>' or a bare address."""
        if not text:
            raise ValueError("empty recipient string")
        if not text.endswith(">"):
            return cls(email=text)
        start = text.find("<")
        # a name of at least one character followed by a space
        if start < 2:
            raise ValueError(f"malformed recipient string '{text}'")
        return cls(name=text[:start].strip(), email=text[start + 1:-1])

    def __str__(self):
        if self.name:
            return f"{self.name} <{self.email}>"
        return self.email