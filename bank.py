# services/tutor/bank.py

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from schemas.grading import BankProgress, VisibleBank
from schemas.quiz import BankAssignment, QuizBank

logger = logging.getLogger("mathtutor.bank")

_BASE = Path(__file__).resolve().parent
_DEFAULT_DIR = _BASE / "data" / "quiz_banks"
ASSIGNMENTS_FILE = "assignments.json"


def bank_dir() -> Path:
    return Path(os.getenv("QUIZ_BANK_DIR") or _DEFAULT_DIR)


def _iter_jsonl(p: Path) -> Iterable[Dict[str, Any]]:
    with p.open("r", encoding="utf-8") as f:
        for idx, line in enumerate(f, 1):
            s = line.strip()
            if not s or s.startswith("#") or s.startswith("//"):
                continue
            try:
                yield json.loads(s)
            except json.JSONDecodeError:
                # Skip malformed rows instead of dropping the whole file
                logger.warning("Skipping malformed line %s:%d", p.name, idx)


def _iter_json(p: Path) -> Iterable[Dict[str, Any]]:
    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError:
            logger.warning("Skipping malformed file %s", p.name)
            return
    # one bank per file, or a list of banks
    if isinstance(data, dict):
        yield data
    elif isinstance(data, list):
        yield from data


class QuizBankStore:
    _banks: Dict[str, QuizBank] = {}
    _assignments: List[BankAssignment] = []
    _loaded = False

    @classmethod
    def load(cls) -> Dict[str, QuizBank]:
        if not cls._loaded:
            cls.reload()
        return cls._banks

    @classmethod
    def assignments(cls) -> List[BankAssignment]:
        cls.load()
        return cls._assignments

    @classmethod
    def reload(cls) -> int:
        root = bank_dir()
        banks: Dict[str, QuizBank] = {}
        assignments: List[BankAssignment] = []

        if root.exists():
            for p in sorted(root.rglob("*")):
                if not p.is_file():
                    continue
                suf = p.suffix.lower()
                if suf == ".jsonl":
                    source = _iter_jsonl(p)
                elif suf == ".json":
                    source = _iter_json(p)
                else:
                    continue

                is_assignments = p.name == ASSIGNMENTS_FILE
                for raw in source:
                    try:
                        if is_assignments:
                            assignments.append(BankAssignment.model_validate(raw))
                        else:
                            bank = QuizBank.model_validate(raw)
                            banks[bank.quiz_bank_id] = bank
                    except ValidationError as e:
                        logger.warning("Skipping invalid record in %s: %s", p.name, e.errors()[:1])
        else:
            logger.warning("Quiz bank directory %s does not exist", root)

        cls._banks = banks
        cls._assignments = assignments
        cls._loaded = True
        logger.info("Loaded %d quiz banks, %d assignments", len(banks), len(assignments))
        return len(banks)


# Public API
def list_banks() -> List[QuizBank]:
    return list(QuizBankStore.load().values())


def get_bank(bank_id: str) -> Optional[QuizBank]:
    return QuizBankStore.load().get(bank_id)


def reload_bank() -> int:
    return QuizBankStore.reload()


# --- Unlocking --------------------------------------------------------------------


def _relevant(a: BankAssignment, topic_id: Optional[str]) -> bool:
    """Active assignments for the topic, plus every video-set assignment."""
    if not a.is_active:
        return False
    return a.video_ids is not None or (topic_id is not None and a.topic_id == topic_id)


def _progress(a: BankAssignment, completed: Sequence[str]) -> BankProgress:
    unlocked = False
    message = ""
    done = 0
    required = 0

    if a.topic_id and a.trigger_after_n_videos is not None:
        required = a.trigger_after_n_videos
        done = len(completed)
        unlocked = done >= required
        if not unlocked:
            remaining = required - done
            message = f"Complete {remaining} more video{'' if remaining == 1 else 's'} to unlock"

    # a video set overrides the topic rule when both are configured
    if a.video_ids is not None and a.min_completed_in_set is not None:
        required = a.min_completed_in_set
        done = len(set(a.video_ids) & set(completed))
        unlocked = done >= required
        message = ""
        if not unlocked:
            remaining = required - done
            message = (
                f"Complete {remaining} more video{'' if remaining == 1 else 's'} "
                "from this set to unlock"
            )

    return BankProgress(
        id=a.id,
        bank_id=a.bank_id,
        is_unlocked=unlocked,
        progress_message=message,
        completed_count=done,
        required_count=required,
        video_ids=a.video_ids or [],
        topic_id=a.topic_id,
    )


def bank_progress(
    topic_id: Optional[str],
    completed_video_ids: Sequence[str],
) -> List[BankProgress]:
    completed = list(dict.fromkeys(completed_video_ids or []))
    return [
        _progress(a, completed)
        for a in QuizBankStore.assignments()
        if _relevant(a, topic_id)
    ]


def visible_banks(topic_id: Optional[str], completed_video_ids: Sequence[str]) -> List[VisibleBank]:
    return [
        VisibleBank(id=p.id, bank_id=p.bank_id)
        for p in bank_progress(topic_id, completed_video_ids)
        if p.is_unlocked
    ]
