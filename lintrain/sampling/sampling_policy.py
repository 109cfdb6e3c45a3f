# lintrain/sampling/sampling_policy.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from lintrain.utils.errors import OverrideParseError
from lintrain.utils.logger import logs

# keep every example unless overridden
DEFAULT_PROBABILITY = 1.0


@dataclass(frozen=True)
class SamplingPolicy:
    """
    SamplingPolicy（FINAL / FROZEN）

    Semantics:
    - label -> probability that an example of that label is kept
    - built once at trainer construction, never mutated
    - returns a probability; keep/drop is the training strategy's call

    Precedence (highest wins):
        file override > inline override > DEFAULT_PROBABILITY
    """

    probabilities: Mapping[str, float]

    def resolve(self, label: str) -> float:
        return self.probabilities.get(label, DEFAULT_PROBABILITY)

    def as_dict(self) -> Dict[str, float]:
        return dict(self.probabilities)

    # --------------------------------------------------
    @classmethod
    def build(
        cls,
        categories: Iterable[str],
        class_probs: Optional[str] = None,
        class_prob_file: Optional[str | Path] = None,
    ) -> "SamplingPolicy":
        cats = tuple(categories)
        known = set(cats)

        # ① default
        probs: Dict[str, float] = {c: DEFAULT_PROBABILITY for c in cats}

        # ② inline overrides: only known categories
        if class_probs:
            for label, p in parse_inline_overrides(class_probs):
                if label not in known:
                    logs.warning(
                        f"[SamplingPolicy] inline override for unknown label {label!r} ignored"
                    )
                    continue
                probs[label] = p

        # ③ file overrides: highest precedence, unknown labels accepted
        if class_prob_file is not None:
            for label, p in read_override_file(class_prob_file):
                if label not in known:
                    logs.warning(
                        f"[SamplingPolicy] file override for label {label!r} "
                        f"not in category set, kept anyway"
                    )
                probs[label] = p

        overridden = {k: v for k, v in probs.items() if v != DEFAULT_PROBABILITY}
        logs.info(
            f"[SamplingPolicy] built categories={len(cats)} overridden={overridden}"
        )

        return cls(probabilities=MappingProxyType(probs))


# ==================================================
# Override parsing
# ==================================================
def parse_override(entry: str, source: str) -> Tuple[str, float]:
    """
    Parse one `label:probability` record.
    """
    parts = entry.strip().split(":")
    if len(parts) != 2:
        raise OverrideParseError(
            f"{source}: expected 'label:probability', got {entry!r}"
        )

    label, raw_p = parts[0].strip(), parts[1].strip()
    if not label:
        raise OverrideParseError(f"{source}: empty label in {entry!r}")

    try:
        p = float(raw_p)
    except ValueError:
        raise OverrideParseError(
            f"{source}: probability is not a number in {entry!r}"
        ) from None

    if not 0.0 <= p <= 1.0:
        raise OverrideParseError(
            f"{source}: probability {p} outside [0, 1] in {entry!r}"
        )

    return label, p


def parse_inline_overrides(text: str) -> Iterator[Tuple[str, float]]:
    """`a:0.5,b:0.2` → (a, 0.5), (b, 0.2)"""
    for i, entry in enumerate(text.split(",")):
        if not entry.strip():
            continue
        yield parse_override(entry, f"class_probs[{i}]")


def read_override_file(path: str | Path) -> Iterator[Tuple[str, float]]:
    """
    Newline-delimited `label:probability` records, no header.
    Blank lines are skipped.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logs.error(f"[SamplingPolicy] cannot read {path}: {e}")
        raise OverrideParseError(f"cannot read class_prob_file {path}: {e}") from e

    records = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        records.append(parse_override(line, f"{path.name}:{lineno}"))

    return iter(records)
