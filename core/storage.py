# MIT License
"""Save and load a single scenario record.

The record is the flat camelCase JSON object produced by
:meth:`ProjectParameters.to_record`, written to
``<directory>/<key>.json``.  Loading validates the record, so a file
that was edited by hand or truncated is reported instead of reaching the
cashflow engine.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from .config import STORAGE_KEY
from .params import ProjectParameters

logger = logging.getLogger(__name__)


class ScenarioStoreError(Exception):
    """Base class for scenario storage errors."""


class ScenarioNotFound(ScenarioStoreError):
    def __init__(self, path: Path):
        super().__init__(f"no saved scenario at {path}")
        self.path = path


class ScenarioCorrupted(ScenarioStoreError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"saved scenario at {path} is corrupted: {reason}")
        self.path = path
        self.reason = reason


class ScenarioWriteFailed(ScenarioStoreError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"could not save scenario to {path}: {reason}")
        self.path = path
        self.reason = reason


def parse_scenario(data: Union[str, bytes], source: Union[str, Path] = "<upload>") -> ProjectParameters:
    """Validate a JSON scenario record.

    ``data`` may be text or raw bytes, e.g. an uploaded file.  Bytes that
    are not UTF-8, malformed JSON and invalid values all raise
    :class:`ScenarioCorrupted` naming ``source``.
    """
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return ProjectParameters.from_json(data)
    except (UnicodeDecodeError, ValidationError) as exc:
        logger.warning("rejected scenario %s: %s", source, exc)
        raise ScenarioCorrupted(Path(source), str(exc)) from exc


class ScenarioStore:
    """File-backed store for one :class:`ProjectParameters` record."""

    def __init__(self, directory: Union[str, Path], key: str = STORAGE_KEY):
        self.directory = Path(directory)
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, params: ProjectParameters) -> Path:
        """Write the record, replacing any earlier save.

        Raises :class:`ScenarioWriteFailed` if the directory cannot be
        created or the file cannot be written.  No ``.tmp`` file is left
        behind in that case.
        """
        tmp = self.directory / f"{self.key}.json.tmp"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(params.to_record(), indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            logger.warning("saving scenario to %s failed: %s", self.path, exc)
            try:
                tmp.unlink()
            except OSError:
                pass  # never created
            raise ScenarioWriteFailed(self.path, str(exc)) from exc
        logger.info("saved scenario to %s", self.path)
        return self.path

    def load(self) -> ProjectParameters:
        """Read and validate the saved record.

        Raises
        ------
        ScenarioNotFound
            Nothing has been saved yet.
        ScenarioCorrupted
            The file cannot be read, is not UTF-8 JSON or does not
            describe a valid parameter set.
        """
        if not self.exists():
            raise ScenarioNotFound(self.path)
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            logger.warning("reading scenario %s failed: %s", self.path, exc)
            raise ScenarioCorrupted(self.path, str(exc)) from exc
        params = parse_scenario(raw, self.path)
        logger.info("loaded scenario from %s", self.path)
        return params
