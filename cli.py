import argparse
import csv
import datetime
import json
import logging
from dataclasses import asdict
from typing import List, Optional

import pandas as pd

from algorithms import RawSet, SessionSummarizer, Side, WeightConverter
from config import APP_VERSION, load_engine_settings, save_engine_settings
from progression_service import ProgressionService
from settings_schema import TREND_MODES, EngineSettings

logger = logging.getLogger(__name__)


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or str(value).strip() == "":
        return None
    return float(value)


def load_sets_csv(csv_path: str, unit: str = "kg") -> List[RawSet]:
    """Read logged sets from a CSV export.

    Required columns are ``date``, ``exercise``, ``weight`` and ``reps``;
    ``rpe``, ``side`` and ``set_type`` are optional. Dates with a UTC offset
    are stored as naive UTC.
    """
    sets: List[RawSet] = []
    with open(csv_path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            try:
                side = (row.get("side") or "").strip().lower()
                sets.append(
                    RawSet(
                        date=SessionSummarizer.normalize_date(
                            datetime.datetime.fromisoformat((row.get("date") or "").strip())
                        ),
                        exercise=(row.get("exercise") or "").strip(),
                        weight=WeightConverter.to_kg(float(row.get("weight") or 0), unit),
                        reps=int(float(row.get("reps") or 0)),
                        rpe=_optional_float(row.get("rpe")),
                        side=Side(side) if side else None,
                        set_type=(row.get("set_type") or "normal").strip(),
                    )
                )
            except ValueError as e:
                raise ValueError(f"{csv_path}:{line_no}: invalid row ({e})") from e
    logger.info("loaded %d sets from %s", len(sets), csv_path)
    return sets


def _to_jsonable(obj):
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_jsonable(v) for v in obj]
    if isinstance(obj, (datetime.date, datetime.datetime)):
        return obj.isoformat()
    if hasattr(obj, "value"):
        return obj.value
    return obj


def show_trend(service: ProgressionService, sets: List[RawSet], exercise: Optional[str], mode: Optional[str]) -> str:
    if exercise:
        result = service.exercise_trend(sets, exercise, mode)
        return json.dumps(_to_jsonable(asdict(result)), indent=2, ensure_ascii=False)
    return service.trend_table(sets, mode).to_string(index=False)


def show_sessions(service: ProgressionService, sets: List[RawSet], exercise: str, sides: bool) -> str:
    entries = service.sessions(sets, exercise, separate_sides=sides)
    frame = pd.DataFrame([asdict(e) for e in entries])
    if frame.empty:
        return "No sessions"
    frame["side"] = frame["side"].map(lambda s: s.value if s is not None else "")
    return frame.to_string(index=False)


def show_sets(service: ProgressionService, sets: List[RawSet], exercise: str, date: str) -> str:
    overview = service.session_overview(sets, exercise, date)
    return json.dumps(_to_jsonable(asdict_overview(overview)), indent=2, ensure_ascii=False)


def asdict_overview(overview: dict) -> dict:
    wisdom = overview["wisdom"]
    return {
        "session": asdict(overview["session"]),
        "wisdom": asdict(wisdom) if wisdom is not None else None,
        "transitions": [asdict(r) for r in overview["transitions"]],
    }


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Training progression analysis")
    parser.add_argument("--config", default=None, help="YAML settings file")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=f"setwise {APP_VERSION}")
    sub = parser.add_subparsers(dest="cmd", required=True)

    trend = sub.add_parser("trend")
    trend.add_argument("--csv", required=True)
    trend.add_argument("--exercise", default=None)
    trend.add_argument("--mode", choices=list(TREND_MODES), default=None)
    trend.add_argument("--unit", choices=["kg", "lb"], default="kg")

    sess = sub.add_parser("sessions")
    sess.add_argument("--csv", required=True)
    sess.add_argument("--exercise", required=True)
    sess.add_argument("--sides", action="store_true")
    sess.add_argument("--unit", choices=["kg", "lb"], default="kg")

    sets_p = sub.add_parser("sets")
    sets_p.add_argument("--csv", required=True)
    sets_p.add_argument("--exercise", required=True)
    sets_p.add_argument("--date", required=True, help="session day, YYYY-MM-DD")
    sets_p.add_argument("--unit", choices=["kg", "lb"], default="kg")

    init = sub.add_parser("init_config")
    init.add_argument("--out", default="settings.yaml")

    conv = sub.add_parser("convert")
    conv.add_argument("--weight", type=float, required=True)
    conv.add_argument("--unit", choices=["kg", "lb"], required=True)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "convert":
        if args.unit == "kg":
            print(f"{args.weight} kg = {WeightConverter.kg_to_lb(args.weight)} lb")
        else:
            print(f"{args.weight} lb = {WeightConverter.lb_to_kg(args.weight)} kg")
        return
    if args.cmd == "init_config":
        save_engine_settings(EngineSettings(), args.out)
        print(f"Default settings written to {args.out}")
        return

    service = ProgressionService(load_engine_settings(args.config))
    sets = load_sets_csv(args.csv, args.unit)
    if args.cmd == "trend":
        print(show_trend(service, sets, args.exercise, args.mode))
    elif args.cmd == "sessions":
        print(show_sessions(service, sets, args.exercise, args.sides))
    elif args.cmd == "sets":
        print(show_sets(service, sets, args.exercise, args.date))


if __name__ == "__main__":
    main()
