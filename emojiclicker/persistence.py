"""Versioned save records, portable export text and on-disk save slots."""
from __future__ import annotations

import base64
import binascii
import json
import logging
import os
import tempfile
from dataclasses import asdict, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from emojiclicker.state import BUY_MAX, GameState, MilestoneEntry, Settings

if TYPE_CHECKING:
    from emojiclicker.definition import Catalog

logger = logging.getLogger(__name__)

SAVE_VERSION = 4

# Scalar fields copied straight across, with the type each must carry.
_NUMBER_FIELDS = (
    "currency",
    "total_earned",
    "click_power",
    "rate",
    "best_rate",
    "start_time",
    "last_tick",
    "last_save",
    "time_played",
)
_INT_FIELDS = (
    "total_clicks",
    "prestige",
    "prestige_spent",
    "prestige_lifetime",
    "reboots",
    "golden_clicks",
    "diamond_count",
)


class InvalidSaveError(ValueError):
    """Raised when save text cannot be decoded into a versioned record."""


def serialize(state: GameState) -> dict[str, Any]:
    """Snapshot *state* as a JSON-compatible record. Buffs are not saved."""
    record: dict[str, Any] = {"version": SAVE_VERSION}
    for name in _NUMBER_FIELDS + _INT_FIELDS:
        record[name] = getattr(state, name)
    record.update(
        producers=dict(state.producers),
        upgrades=list(state.upgrades),
        achievements=list(state.achievements),
        prestige_nodes=list(state.prestige_nodes),
        unlocked_skins=list(state.unlocked_skins),
        active_skin=state.active_skin,
        season=state.season,
        save_name=state.save_name,
        settings=asdict(state.settings),
        secrets=list(state.secrets),
        pet_hatched=state.pet_hatched,
        milestones=[{"text": m.text, "time": m.time} for m in state.milestones],
    )
    return record


# ── Deserialization helpers ──────────────────────────────────────────


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return _is_number(value) and float(value).is_integer()


def _id_list(value: Any, known: set[str] | None = None) -> list[str] | None:
    """String ids in order, deduplicated, unknown ones dropped."""
    if not isinstance(value, list):
        return None
    out: list[str] = []
    for item in value:
        if not isinstance(item, str) or item in out:
            continue
        if known is not None and item not in known:
            continue
        out.append(item)
    return out


def _merge_settings(value: Any) -> Settings:
    settings = Settings()
    if not isinstance(value, dict):
        return settings
    for f in fields(Settings):
        if f.name not in value:
            continue
        raw = value[f.name]
        default = getattr(settings, f.name)
        if isinstance(default, bool):
            if isinstance(raw, bool):
                setattr(settings, f.name, raw)
        elif f.name == "volume":
            if _is_number(raw):
                settings.volume = min(1.0, max(0.0, float(raw)))
        elif f.name == "bulk_buy":
            if _is_int(raw) and (raw >= 1 or raw == BUY_MAX):
                settings.bulk_buy = int(raw)
    return settings


def deserialize(record: Any, catalog: Catalog) -> GameState | None:
    """Rebuild a state from *record*, field by field over fresh defaults.

    Returns None when *record* is not a mapping or has no version tag.
    Missing or mistyped fields keep their fresh value, so a record written
    by an older version loads with defaults for whatever it lacks.
    """
    if not isinstance(record, dict) or not record.get("version"):
        return None

    state = GameState(catalog)

    for name in _NUMBER_FIELDS:
        value = record.get(name)
        if _is_number(value):
            setattr(state, name, max(0.0, float(value)))
    for name in _INT_FIELDS:
        value = record.get(name)
        if _is_int(value) and value >= 0:
            setattr(state, name, int(value))

    producers = record.get("producers")
    if isinstance(producers, dict):
        for pid in state.producers:
            count = producers.get(pid)
            if _is_int(count) and count >= 0:
                state.producers[pid] = int(count)

    upgrade_ids = {u.id for u in catalog.upgrades}
    achievement_ids = {a.id for a in catalog.achievements}
    node_ids = {n.id for n in catalog.prestige_nodes}
    for name, known in (
        ("upgrades", upgrade_ids),
        ("achievements", achievement_ids),
        ("prestige_nodes", node_ids),
        ("secrets", None),
    ):
        ids = _id_list(record.get(name), known)
        if ids is not None:
            setattr(state, name, ids)

    skins = _id_list(record.get("unlocked_skins"), set(catalog.all_skins) or None)
    if skins:
        state.unlocked_skins = skins
    active = record.get("active_skin")
    if isinstance(active, str) and active in state.unlocked_skins:
        state.active_skin = active

    season = record.get("season")
    if season is None or (isinstance(season, str) and catalog.get_season(season)):
        state.season = season
    if isinstance(record.get("save_name"), str):
        state.save_name = record["save_name"]
    if isinstance(record.get("pet_hatched"), bool):
        state.pet_hatched = record["pet_hatched"]

    state.settings = _merge_settings(record.get("settings"))

    milestones = record.get("milestones")
    if isinstance(milestones, list):
        state.milestones = [
            MilestoneEntry(text=m["text"], time=float(m["time"]))
            for m in milestones
            if isinstance(m, dict)
            and isinstance(m.get("text"), str)
            and _is_number(m.get("time"))
        ][-state.milestone_limit:]

    return state


# ── Text encodings ───────────────────────────────────────────────────


def dumps(state: GameState) -> str:
    return json.dumps(serialize(state), ensure_ascii=False)


def loads(text: str, catalog: Catalog) -> GameState | None:
    """Parse a stored record; corrupt text is treated as no save at all."""
    try:
        record = json.loads(text)
    except (TypeError, ValueError):
        logger.warning("Stored save is not valid JSON; ignoring it")
        return None
    state = deserialize(record, catalog)
    if state is None:
        logger.warning("Stored save has no version tag; ignoring it")
    return state


def export_text(state: GameState) -> str:
    """Base64 of the JSON record, safe to paste anywhere."""
    return base64.b64encode(dumps(state).encode("utf-8")).decode("ascii")


def decode_text(text: str) -> dict[str, Any]:
    try:
        raw = base64.b64decode(text.strip().encode("ascii"), validate=True)
        record = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise InvalidSaveError(f"Could not decode save: {exc}") from exc
    if not isinstance(record, dict) or not record.get("version"):
        raise InvalidSaveError("Save has no version tag")
    return record


def import_text(text: str, catalog: Catalog) -> GameState:
    state = deserialize(decode_text(text), catalog)
    if state is None:
        raise InvalidSaveError("Save has no version tag")
    return state


# ── Save slot ────────────────────────────────────────────────────────


class SaveSlot:
    """One save file on disk. Writes replace the file atomically."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def read(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Could not read save %s: %s", self.path, exc)
            return None

    def write(self, text: str) -> bool:
        """Write *text*; failures are logged and reported as False."""
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.warning("Could not write save %s: %s", self.path, exc)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False
        logger.debug("Saved %d bytes to %s", len(text), self.path)
        return True

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not delete save %s: %s", self.path, exc)
