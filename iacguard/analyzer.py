"""Detect which platform types are present in a set of paths."""

from __future__ import annotations

import logging
import os
import re

from iacguard.metrics import METRIC

logger = logging.getLogger(__name__)

_YAML_EXTENSIONS = (".yaml", ".yml")
_CONTENT_EXTENSIONS = (*_YAML_EXTENSIONS, ".json")

_OPENAPI = re.compile(rb'(\s*"openapi":)|(\s*openapi:)|(\s*"swagger":)|(\s*swagger:)')
_OPENAPI_INFO = re.compile(rb'(\s*"info":)|(\s*info:)')
_OPENAPI_PATHS = re.compile(rb'(\s*"paths":)|(\s*paths:)')
_CLOUD = re.compile(rb'(\s*"Resources":)|(\s*Resources:)')
_K8S = re.compile(rb'(\s*"apiVersion":)|(\s*apiVersion:)')
_K8S_KIND = re.compile(rb'(\s*"kind":)|(\s*kind:)')
_K8S_METADATA = re.compile(rb'(\s*"metadata":)|(\s*metadata:)')

_CONTENT_TYPES: dict[str, tuple[re.Pattern[bytes], ...]] = {
    "openapi": (_OPENAPI, _OPENAPI_INFO, _OPENAPI_PATHS),
    "kubernetes": (_K8S, _K8S_KIND, _K8S_METADATA),
    "cloudformation": (_CLOUD,),
}
# Reverse order puts cloudformation, the least demanding type, last.
_CONTENT_ORDER = sorted(_CONTENT_TYPES, reverse=True)


class AnalysisError(Exception):
    """Raised when a path given for analysis cannot be read."""


def _extension(path: str) -> str:
    base = os.path.basename(path)
    dot = base.rfind(".")
    ext = base[dot:] if dot >= 0 else ""
    return ext or base


def _classify(path: str) -> tuple[str | None, bool]:
    """Return the detected type and whether the file should be ignored."""
    ext = _extension(path)
    if ext in (".dockerfile", "Dockerfile"):
        return "dockerfile", False
    if ext == ".tf":
        return "terraform", False
    if ext not in _CONTENT_EXTENSIONS:
        return None, False

    try:
        with open(path, "rb") as handle:
            content = handle.read()
    except OSError as err:
        logger.error("failed to analyze file: %s", err)
        return None, False

    for key in _CONTENT_ORDER:
        if all(pattern.search(content) for pattern in _CONTENT_TYPES[key]):
            return key, False
    if ext in _YAML_EXTENSIONS:
        # YAML without any defining property is taken to be Ansible.
        return "ansible", False
    return None, True


def detect_type(path: str) -> str | None:
    """Return the platform type of a single file, or None when undetermined."""
    return _classify(path)[0]


def _collect_files(paths: list[str]) -> list[str]:
    files: list[str] = []
    for path in paths:
        try:
            os.stat(path)
        except OSError as err:
            raise AnalysisError(f"failed to analyze path: {err}") from err
        if not os.path.isdir(path):
            files.append(path)
            continue
        for dirpath, dirnames, filenames in os.walk(path):
            dirnames.sort()
            files.extend(os.path.join(dirpath, name) for name in sorted(filenames))
    return files


def analyze(paths: list[str]) -> tuple[list[str], list[str]]:
    """Return the platform types found and the files to exclude from parsing."""
    METRIC.start("file_type_analyzer")
    try:
        types: list[str] = []
        excluded: list[str] = []
        for file in _collect_files(paths):
            kind, unwanted = _classify(file)
            if kind is not None:
                if kind not in types:
                    types.append(kind)
            elif unwanted and file not in excluded:
                excluded.append(file)
        return types, excluded
    finally:
        METRIC.stop()