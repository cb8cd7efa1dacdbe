"""
Instruction types for KATRIN programs.

A parsed script is a Program: an ordered tuple of instructions, one model per
instruction kind. Each model carries only the fields its production produces
and also exposes the uniform ``kind`` / ``primary_value`` / ``parameters``
view used by runtimes that treat instructions generically.

Examples:
    - say "Hello"                -> SayInstruction(text="Hello")
    - call give_item(player, x)  -> CallInstruction(action="give_item", arguments=("player", "x"))
    - Assets { bg1 music1 }      -> AssetsInstruction(names=("bg1", "music1"))
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class InstructionKind(StrEnum):
    """Instruction kinds, one per instruction keyword."""

    ASSETS = "assets"
    CALL = "call"
    BACKGROUND = "background"
    PLAY = "play"
    SAY = "say"
    WAIT = "wait"
    END = "end"
    LOAD_SCRIPT = "load_script"


class AssetsInstruction(BaseModel):
    """
    Asset declaration block.

    Every raw lexeme between the braces is kept, whatever its token kind.
    """

    kind: Literal[InstructionKind.ASSETS] = InstructionKind.ASSETS
    names: tuple[str, ...] = Field(default=(), description="Declared asset names")

    model_config = ConfigDict(frozen=True)

    @property
    def primary_value(self) -> str:
        return "Assets"

    @property
    def parameters(self) -> tuple[str, ...]:
        return self.names

    def __str__(self) -> str:
        return "Assets { " + " ".join(self.names) + " }" if self.names else "Assets { }"


class CallInstruction(BaseModel):
    """Invocation of a runtime action, optionally with identifier arguments."""

    kind: Literal[InstructionKind.CALL] = InstructionKind.CALL
    action: str = Field(description="Action name")
    arguments: tuple[str, ...] = Field(default=(), description="Argument identifiers")

    model_config = ConfigDict(frozen=True)

    @property
    def primary_value(self) -> str:
        return self.action

    @property
    def parameters(self) -> tuple[str, ...]:
        return self.arguments

    def __str__(self) -> str:
        if not self.arguments:
            return f"call {self.action}"
        return f"call {self.action}({', '.join(self.arguments)})"


class BackgroundInstruction(BaseModel):
    """Switch the scene background."""

    kind: Literal[InstructionKind.BACKGROUND] = InstructionKind.BACKGROUND
    name: str = Field(description="Background asset name")

    model_config = ConfigDict(frozen=True)

    @property
    def primary_value(self) -> str:
        return self.name

    @property
    def parameters(self) -> tuple[str, ...]:
        return ()

    def __str__(self) -> str:
        return f"background {self.name}"


class PlayInstruction(BaseModel):
    """Start audio playback."""

    kind: Literal[InstructionKind.PLAY] = InstructionKind.PLAY
    track: str = Field(description="Audio asset name")

    model_config = ConfigDict(frozen=True)

    @property
    def primary_value(self) -> str:
        return self.track

    @property
    def parameters(self) -> tuple[str, ...]:
        return ()

    def __str__(self) -> str:
        return f"play {self.track}"


class SayInstruction(BaseModel):
    """Show a line of dialogue."""

    kind: Literal[InstructionKind.SAY] = InstructionKind.SAY
    text: str = Field(description="Dialogue text")

    model_config = ConfigDict(frozen=True)

    @property
    def primary_value(self) -> str:
        return self.text

    @property
    def parameters(self) -> tuple[str, ...]:
        return ()

    def __str__(self) -> str:
        return f'say "{self.text}"'


class WaitInstruction(BaseModel):
    """
    Pause execution.

    The duration is kept as written in the script; ``milliseconds`` gives the
    numeric view.
    """

    kind: Literal[InstructionKind.WAIT] = InstructionKind.WAIT
    duration: str = Field(description="Digit run as written in the script")

    model_config = ConfigDict(frozen=True)

    @property
    def milliseconds(self) -> int:
        return int(self.duration)

    @property
    def primary_value(self) -> str:
        return self.duration

    @property
    def parameters(self) -> tuple[str, ...]:
        return ()

    def __str__(self) -> str:
        return f"wait {self.duration}"


class EndInstruction(BaseModel):
    """Stop the current script."""

    kind: Literal[InstructionKind.END] = InstructionKind.END

    model_config = ConfigDict(frozen=True)

    @property
    def primary_value(self) -> str:
        return "end"

    @property
    def parameters(self) -> tuple[str, ...]:
        return ()

    def __str__(self) -> str:
        return "end"


class LoadScriptInstruction(BaseModel):
    """Continue execution in another script."""

    kind: Literal[InstructionKind.LOAD_SCRIPT] = InstructionKind.LOAD_SCRIPT
    path: str = Field(description="Path of the script to load")

    model_config = ConfigDict(frozen=True)

    @property
    def primary_value(self) -> str:
        return self.path

    @property
    def parameters(self) -> tuple[str, ...]:
        return ()

    def __str__(self) -> str:
        return f'load_script "{self.path}"'


Instruction = Annotated[
    Union[
        AssetsInstruction,
        CallInstruction,
        BackgroundInstruction,
        PlayInstruction,
        SayInstruction,
        WaitInstruction,
        EndInstruction,
        LoadScriptInstruction,
    ],
    Field(discriminator="kind"),
]


class Program(BaseModel):
    """
    A fully parsed script.

    Instruction order is execution order.
    """

    instructions: tuple[Instruction, ...] = Field(default=())

    model_config = ConfigDict(frozen=True)

    def __len__(self) -> int:
        return len(self.instructions)

    def of_kind(self, kind: InstructionKind) -> list[Instruction]:
        """Return the instructions of one kind, in program order."""
        return [instr for instr in self.instructions if instr.kind == kind]

    def __str__(self) -> str:
        return "\n".join(str(instr) for instr in self.instructions)
