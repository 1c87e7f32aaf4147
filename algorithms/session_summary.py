import datetime
from typing import Dict, Iterable, List

from .models import RawSet, SessionEntry
from .set_metrics import SetMetricsExtractor


class SessionSummarizer:
    """Collapse a flat set history into one entry per session."""

    @staticmethod
    def normalize_date(value: datetime.datetime) -> datetime.datetime:
        """Return ``value`` as a naive datetime, converting aware ones to UTC."""
        if value.tzinfo is None:
            return value
        return value.astimezone(datetime.timezone.utc).replace(tzinfo=None)

    @classmethod
    def session_key(cls, raw: RawSet, separate_sides: bool = False, by_day: bool = False) -> str:
        when = cls.normalize_date(raw.date)
        base = when.date().isoformat() if by_day else when.isoformat()
        if separate_sides and raw.side is not None:
            return f"{base}-{raw.side.value}"
        return base

    @classmethod
    def summarize(
        cls,
        history: Iterable[RawSet],
        separate_sides: bool = False,
        by_day: bool = False,
        include_warmups: bool = False,
    ) -> List[SessionEntry]:
        """Return one :class:`SessionEntry` per session, newest first.

        The representative weight and reps belong to the set with the highest
        estimated 1RM; on ties the later set wins. Left/right sets count as
        half a set each so a pair reads as one bilateral set. Timezone-aware
        dates are compared as naive UTC.
        """
        sessions: Dict[str, dict] = {}
        for raw in history:
            if raw.date is None:
                continue
            if not include_warmups and SetMetricsExtractor.is_warmup(raw):
                continue
            metrics = SetMetricsExtractor.extract(raw)
            key = cls.session_key(raw, separate_sides, by_day)
            item = sessions.setdefault(
                key,
                {
                    "date": cls.normalize_date(raw.date),
                    "weight": 0.0,
                    "reps": 0,
                    "one_rep_max": 0.0,
                    "volume": 0.0,
                    "sets": 0.0,
                    "total_reps": 0,
                    "max_reps": 0,
                    "side": raw.side if separate_sides else None,
                },
            )
            item["sets"] += 0.5 if raw.side is not None else 1.0
            item["volume"] += metrics.volume
            item["total_reps"] += max(raw.reps, 0)
            item["max_reps"] = max(item["max_reps"], raw.reps)
            if metrics.one_rm >= item["one_rep_max"]:
                item["one_rep_max"] = metrics.one_rm
                item["weight"] = raw.weight
                item["reps"] = raw.reps

        entries = [SessionEntry(**data) for data in sessions.values()]
        return sorted(entries, key=lambda e: e.date, reverse=True)
