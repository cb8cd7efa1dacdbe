"""Tests for the instruction IR."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from katrin.core import ir
from katrin.core.parser import parse_script


class TestInstructionModels:
    def test_uniform_view(self) -> None:
        instr = ir.CallInstruction(action="open_door", arguments=("player",))
        assert instr.kind == ir.InstructionKind.CALL
        assert instr.primary_value == "open_door"
        assert instr.parameters == ("player",)

    def test_instructions_are_frozen(self) -> None:
        instr = ir.SayInstruction(text="Hello")
        with pytest.raises(ValidationError):
            instr.text = "Goodbye"  # type: ignore[misc]

    def test_wait_milliseconds(self) -> None:
        assert ir.WaitInstruction(duration="0750").milliseconds == 750

    def test_str_renders_script_syntax(self) -> None:
        assert str(ir.SayInstruction(text="Hi")) == 'say "Hi"'
        assert str(ir.CallInstruction(action="f", arguments=("a", "b"))) == "call f(a, b)"
        assert str(ir.AssetsInstruction(names=("bg1",))) == "Assets { bg1 }"
        assert str(ir.EndInstruction()) == "end"


class TestProgram:
    def test_json_handoff(self, sample_script: str) -> None:
        program = parse_script(sample_script)
        restored = ir.Program.model_validate_json(program.model_dump_json())
        assert restored == program
        assert isinstance(restored.instructions[5], ir.CallInstruction)

    def test_json_uses_kind_tags(self) -> None:
        program = parse_script("wait 10")
        data = program.model_dump(mode="json")
        assert data == {"instructions": [{"kind": "wait", "duration": "10"}]}

    def test_of_kind(self, sample_script: str) -> None:
        program = parse_script(sample_script)
        assets = program.of_kind(ir.InstructionKind.ASSETS)
        assert len(assets) == 1
        assert assets[0].parameters == ("forest", "rain", "theme")

    def test_program_is_frozen(self) -> None:
        program = parse_script("end")
        with pytest.raises(ValidationError):
            program.instructions = ()  # type: ignore[misc]

    def test_str_reproduces_script(self) -> None:
        source = 'background forest\nsay "Hi"\nend'
        assert str(parse_script(source)) == source
