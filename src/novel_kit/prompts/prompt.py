import re

from pydantic import BaseModel, ConfigDict

_PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class Prompt(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    version: str
    description: str
    inputs: dict[str, str]
    template: str

    def render(self, **values: str) -> str:
        """Fill `{{ name }}` placeholders. Every declared input is required."""
        missing = sorted(set(self.inputs) - set(values))
        if missing:
            raise ValueError(
                f"Prompt '{self.name}' missing inputs: {', '.join(missing)}"
            )
        unknown = sorted(set(values) - set(self.inputs))
        if unknown:
            raise ValueError(
                f"Prompt '{self.name}' got unknown inputs: {', '.join(unknown)}"
            )
        return _PLACEHOLDER_RE.sub(
            lambda m: str(values.get(m.group(1), m.group(0))), self.template
        )
