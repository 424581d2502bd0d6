from collections.abc import Callable

from pydantic import BaseModel

from openrouter_kit.chat.schema import ToolDescriptor


class Tool:
    """A callable the model may invoke, with its argument schema."""

    def __init__(
        self,
        *,
        name: str,
        description: str,
        input_schema: type[BaseModel],
        handler: Callable,
    ) -> None:
        self.name = name
        self.description = description
        self.input_schema = input_schema
        self.handler = handler

    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor.from_model(
            self.name, self.input_schema, description=self.description
        )
