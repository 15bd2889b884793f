#!/usr/bin/env python3
"""Run one analysis pass and print a fleet report.

Fetches the 24 hourly constellation snapshots, reconstructs tracks,
compares each active balloon's ground speed with the modeled wind at its
pressure level, and prints per-balloon match scores plus fleet statistics.

Usage
-----
Optionally set ``BALLOONWIND_*`` environment variables and run::

    python scripts/fleet_report.py

Options::

    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
    --limit N            Only list the N best-scored balloons (default: all)
    --no-wind-cache      Query the wind model once per balloon
    --verbose            Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from balloonwind import AnalysisResult, BalloonWindClient, BalloonWindConfig  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _fmt(value: float | None, digits: int = 1) -> str:
    return "n/a" if value is None else f"{value:.{digits}f}"


def _result_to_dict(result: AnalysisResult, config: BalloonWindConfig) -> dict[str, Any]:
    active = result.active_tracks(config.active_max_offset)
    summary = result.summary
    return {
        "timestamp": datetime.now(UTC).isoformat(),
        "summary": {
            **summary.model_dump(),
            "corrupt_percent": summary.corrupt_percent,
        },
        "scores": {
            entity_id: {
                **score.model_dump(mode="json"),
                "speed_difference_kmh": score.speed_difference_kmh,
                "quality": score.quality.value,
            }
            for entity_id, score in result.scores.items()
        },
        "active_tracks": {
            entity_id: [point.model_dump(mode="json", exclude={"entity_id"}) for point in track.points]
            for entity_id, track in active.items()
        },
    }


def _render_text(result: AnalysisResult, limit: int | None) -> list[str]:
    summary = result.summary
    out: list[str] = [_section("FLEET")]
    out.append(f"  active balloons : {summary.active_count} (of {summary.track_count} tracked)")
    out.append(f"  valid points    : {summary.valid_point_count}")
    out.append(
        f"  corrupt files   : {summary.corrupt_file_count}/{summary.hours_requested} ({summary.corrupt_percent}%)"
    )
    out.append(f"  scored          : {summary.scored_count}")
    out.append(f"  average score   : {summary.average_score}")

    ranked = sorted(result.scores.values(), key=lambda s: (-s.score, s.entity_id))
    if limit is not None:
        ranked = ranked[:limit]

    out.append(_section("SCORES"))
    if not ranked:
        out.append("  (no balloon could be scored)")
    for score in ranked:
        level = score.pressure_level.label if score.pressure_level is not None else "?"
        out.append(
            f"  {score.entity_id[:12]:<12}  balloon {_fmt(score.balloon_speed_kmh):>7} km/h"
            f"  wind {_fmt(score.wind_speed_kmh):>7} km/h @ {level:<7}"
            f"  dir {_fmt(score.wind_direction_deg, 0):>4}"
            f"  score {score.score:>3}  {score.quality.value}"
        )
    return out


# ── main ─────────────────────────────────────────────────────


async def main() -> None:
    parser = argparse.ArgumentParser(description="Balloon / wind-model fleet report")
    parser.add_argument("--json", dest="json_mode", action="store_true", help="Output JSON")
    parser.add_argument("--output", help="Write output to this file")
    parser.add_argument("--limit", type=int, default=None, help="Only list the N best-scored balloons")
    parser.add_argument("--no-wind-cache", action="store_true", help="Disable per-pass wind deduplication")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {}
    if args.no_wind_cache:
        overrides["wind_cache_enabled"] = False
    config = BalloonWindConfig.from_env(**overrides)

    async with BalloonWindClient(config) as client:
        result = await client.run_analysis_pass()

    if args.json_mode:
        payload = json.dumps(_result_to_dict(result, config), indent=2, default=str, ensure_ascii=False)
    else:
        payload = "\n".join(_render_text(result, args.limit))

    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"Report written to {args.output}", file=sys.stderr)
    else:
        print(payload)


if __name__ == "__main__":
    asyncio.run(main())
