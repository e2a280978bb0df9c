from __future__ import annotations

# ruff: noqa: E402
import argparse
import json
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

REPO_ROOT = Path(__file__).resolve().parents[1]
PYTHON_ROOT = REPO_ROOT / "python"
if str(PYTHON_ROOT) not in sys.path:
    sys.path.insert(0, str(PYTHON_ROOT))

from pcg32_toolkit import DEFAULT_STREAM, Pcg32Config, Pcg32Rng
from pcg32_toolkit.run_log import JsonlRunLogger

VECTOR_SCHEMA_VERSION = 1
VECTOR_KEYS = ("next_uint", "next_bounded", "next_single", "next_double")
CONFIG_KEYS = ("seed", "stream", "count", "bound")


class VectorMismatch(RuntimeError):
    pass


@dataclass(frozen=True)
class VectorConfig:
    seed: int = 42
    stream: int = DEFAULT_STREAM
    count: int = 6
    bound: int = 6


def build_reference_vectors(cfg: VectorConfig) -> dict[str, Any]:
    """Draw each operation from a fresh generator so vectors stay independent."""
    pcg_cfg = Pcg32Config(seed=cfg.seed, stream=cfg.stream)

    uint_rng = Pcg32Rng.from_config(pcg_cfg)
    bounded_rng = Pcg32Rng.from_config(pcg_cfg)
    single_rng = Pcg32Rng.from_config(pcg_cfg)
    double_rng = Pcg32Rng.from_config(pcg_cfg)

    return {
        "schema_version": VECTOR_SCHEMA_VERSION,
        "config": asdict(cfg),
        "next_uint": [f"0x{uint_rng.next_uint():08x}" for _ in range(cfg.count)],
        "next_bounded": [bounded_rng.next_bounded(cfg.bound) for _ in range(cfg.count)],
        "next_single": single_rng.next_single(),
        "next_double": double_rng.next_double(),
    }


def load_vectors(path: Path) -> dict[str, Any]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if int(payload.get("schema_version", -1)) != VECTOR_SCHEMA_VERSION:
        raise VectorMismatch(f"unsupported vector schema version: {payload.get('schema_version')}")

    missing = [key for key in ("config", *VECTOR_KEYS) if key not in payload]
    if missing:
        raise VectorMismatch(f"vector bundle missing keys: {missing}")

    raw = payload["config"]
    if not isinstance(raw, dict):
        raise VectorMismatch("vector bundle config must be an object")
    missing_config = [key for key in CONFIG_KEYS if key not in raw]
    if missing_config:
        raise VectorMismatch(f"vector bundle config missing keys: {missing_config}")
    return payload


def config_from_vectors(payload: dict[str, Any]) -> VectorConfig:
    raw = payload["config"]
    return VectorConfig(
        seed=int(raw["seed"]),
        stream=int(raw["stream"]),
        count=int(raw["count"]),
        bound=int(raw["bound"]),
    )


def compare_vectors(expected: dict[str, Any], actual: dict[str, Any]) -> dict[str, Any] | None:
    for key in ("next_uint", "next_bounded"):
        exp_seq = list(expected[key])
        act_seq = list(actual[key])
        if len(exp_seq) != len(act_seq):
            return {"field": key, "expected_len": len(exp_seq), "actual_len": len(act_seq)}
        for idx, (exp, act) in enumerate(zip(exp_seq, act_seq)):
            if exp != act:
                return {"field": key, "index": idx, "expected": exp, "actual": act}

    for key in ("next_single", "next_double"):
        if float(expected[key]) != float(actual[key]):
            return {"field": key, "expected": float(expected[key]), "actual": float(actual[key])}

    return None


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate or check PCG32 reference vectors.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--stream", type=int, default=DEFAULT_STREAM)
    parser.add_argument("--count", type=int, default=6, help="Draws per integer vector.")
    parser.add_argument("--bound", type=int, default=6, help="Bound for next_bounded draws.")
    parser.add_argument(
        "--from-entropy",
        action="store_true",
        help="Draw seed and stream from OS entropy instead of --seed/--stream.",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write bundle JSON here.")
    parser.add_argument(
        "--check",
        type=Path,
        default=None,
        help="Regenerate from a stored bundle's config and compare against it.",
    )
    parser.add_argument("--log", type=Path, default=None, help="Append a JSONL run record.")
    parser.add_argument("--allow-mismatch", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logger = JsonlRunLogger(path=args.log) if args.log is not None else None

    if args.check is not None:
        expected = load_vectors(args.check)
        cfg = config_from_vectors(expected)
    else:
        expected = None
        seed, stream = args.seed, args.stream
        if args.from_entropy:
            pcg_cfg = Pcg32Config.from_entropy()
            seed, stream = pcg_cfg.seed, pcg_cfg.stream
        cfg = VectorConfig(seed=seed, stream=stream, count=args.count, bound=args.bound)

    actual = build_reference_vectors(cfg)

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(actual, indent=2), encoding="utf-8")

    mismatch = compare_vectors(expected, actual) if expected is not None else None
    status = "FAIL" if mismatch is not None else "PASS"

    if logger is not None:
        logger.log_run(
            {
                "status": status,
                "config": asdict(cfg),
                "checked": str(args.check) if args.check is not None else None,
                "mismatch": mismatch,
            }
        )

    if mismatch is None:
        print(f"PASS seed={cfg.seed} stream={cfg.stream} count={cfg.count} bound={cfg.bound}")
        return 0

    print(
        "FAIL "
        f"seed={cfg.seed} stream={cfg.stream} "
        f"field={mismatch.get('field')} index={mismatch.get('index')}"
    )
    return 0 if args.allow_mismatch else 1


if __name__ == "__main__":
    raise SystemExit(main())
