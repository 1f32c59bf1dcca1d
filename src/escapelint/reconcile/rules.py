from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from escapelint.diagnostics import DiagnosticEvent, DiagnosticSink, build_diagnostic_event
from escapelint.model import Annotation, AnnotationIndex, CompilerHint, HintIndex, Position


@dataclass(frozen=True, slots=True)
class ReconcileRule:
    code: str
    subject: str
    failure_text: str
    violated: Callable[[tuple[CompilerHint, ...]], bool]

    def message(self, position: Position, annotation: Annotation) -> str:
        return f"{self.subject} at {position} is marked as {annotation} but {self.failure_text}"


def _escapes(hints: tuple[CompilerHint, ...]) -> bool:
    return CompilerHint.ESCAPES_TO_HEAP in hints or CompilerHint.MOVED_TO_HEAP in hints


def _bounds_checked(hints: tuple[CompilerHint, ...]) -> bool:
    return CompilerHint.FOUND_IS_IN_BOUNDS in hints


def _not_inlined(hints: tuple[CompilerHint, ...]) -> bool:
    return CompilerHint.INLINED not in hints


RULES: Mapping[Annotation, ReconcileRule] = MappingProxyType(
    {
        Annotation.NO_ESCAPE: ReconcileRule(
            code="E_RECONCILE_ESCAPES",
            subject="variable",
            failure_text="escapes to heap",
            violated=_escapes,
        ),
        Annotation.NO_BOUNDS_CHECK: ReconcileRule(
            code="E_RECONCILE_BOUNDS_CHECK",
            subject="variable",
            failure_text="bounds check is not eliminated",
            violated=_bounds_checked,
        ),
        Annotation.MUST_INLINE: ReconcileRule(
            code="E_RECONCILE_NOT_INLINED",
            subject="function",
            failure_text="is not inlined",
            violated=_not_inlined,
        ),
    }
)


def find_violations(
    hints: HintIndex,
    annotations: AnnotationIndex,
) -> tuple[DiagnosticEvent, ...]:
    """Check every annotation against the hints recorded at its position.

    Positions are visited in (file, line) order. Hints without an annotation
    are never inspected; only annotations can fail.
    """
    violations: list[DiagnosticEvent] = []
    for position in sorted(annotations):
        observed = hints.get(position, ())
        for annotation in annotations[position]:
            rule = RULES[annotation]
            if not rule.violated(observed):
                continue
            violations.append(
                build_diagnostic_event(
                    code=rule.code,
                    message=rule.message(position, annotation),
                    file=position.file,
                    line=position.line,
                    witness={
                        "annotation": annotation.value,
                        "hints": [hint.value for hint in observed],
                    },
                )
            )
    return tuple(violations)


def reconcile(
    hints: HintIndex,
    annotations: AnnotationIndex,
    sink: DiagnosticSink | None = None,
) -> bool:
    violations = find_violations(hints, annotations)
    if sink is not None:
        sink.extend(violations)
    return not violations
