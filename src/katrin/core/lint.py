"""
Static checks over parsed KATRIN programs.

These findings are not syntax errors: the program parsed, but a runtime
would likely misbehave or an author probably made a mistake.
"""

from collections import Counter

from . import ir


def lint_program(program: ir.Program) -> tuple[list[str], list[str]]:
    """
    Validate a Program for semantic errors and warnings.

    Checks:
    - load_script with an empty path (error)
    - background/play referencing names missing from the Assets blocks
    - duplicate names across Assets blocks
    - instructions after an ``end``

    Args:
        program: Parsed program

    Returns:
        Tuple of (errors, warnings)
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not program.instructions:
        warnings.append("Script contains no instructions.")
        return errors, warnings

    for index, instr in enumerate(program.instructions, start=1):
        if isinstance(instr, ir.LoadScriptInstruction) and not instr.path.strip():
            errors.append(f"Instruction {index}: load_script has an empty path.")

    warnings.extend(_check_asset_declarations(program))
    warnings.extend(_check_unreachable(program))

    return errors, warnings


def _check_asset_declarations(program: ir.Program) -> list[str]:
    warnings: list[str] = []
    declared: Counter[str] = Counter()
    for instr in program.of_kind(ir.InstructionKind.ASSETS):
        declared.update(instr.parameters)

    for name, count in sorted(declared.items()):
        if count > 1:
            warnings.append(f"Asset '{name}' is declared {count} times.")

    # Without any Assets block, names are resolved by the runtime alone
    if not declared:
        return warnings

    for index, instr in enumerate(program.instructions, start=1):
        if isinstance(instr, (ir.BackgroundInstruction, ir.PlayInstruction)):
            if instr.primary_value not in declared:
                warnings.append(
                    f"Instruction {index}: {instr.kind.value} '{instr.primary_value}' "
                    "is not declared in Assets."
                )
    return warnings


def _check_unreachable(program: ir.Program) -> list[str]:
    for index, instr in enumerate(program.instructions, start=1):
        if instr.kind == ir.InstructionKind.END and index < len(program.instructions):
            remaining = len(program.instructions) - index
            return [f"Instruction {index}: {remaining} instruction(s) after 'end' are unreachable."]
    return []
