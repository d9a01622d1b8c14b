"""Utility helpers for importing modules that register test cases."""
from __future__ import annotations

import hashlib
import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterable, List

logger = logging.getLogger(__name__)


def load_module(target: str) -> ModuleType:
    """Import a case module by dotted name or by ``.py`` file path.

    Importing is what registers the module's cases, so a module that has
    already been imported is returned as-is rather than executed again.
    """

    if not target or not target.strip():
        raise ValueError("Empty module target provided")
    target = target.strip()
    if Path(target).suffix == ".py":
        return _load_from_source(Path(target))
    module = importlib.import_module(target)
    logger.info("Imported case module %s", target)
    return module


def load_modules(targets: Iterable[str]) -> List[ModuleType]:
    return [load_module(target) for target in targets]


def _load_from_source(source: Path) -> ModuleType:
    path = source.expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Case module not found: {path}")
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    module_name = f"unitharness_cases_{path.stem}_{digest}"
    if module_name in sys.modules:
        return sys.modules[module_name]
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Unable to load module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[module_name]
        raise
    logger.info("Imported case module %s", path)
    return module
