#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/utils/decorators.py
"""Utility decorators for the converter.

Provides the dependency check applied to conversion entry points and a
DEBUG-only timing context manager.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import lru_cache, wraps
from importlib import metadata
from typing import Any, Callable, Generator, List, Tuple, Union

from packaging import version
from packaging.specifiers import InvalidSpecifier, SpecifierSet

from html2pdfmake.exceptions import DependencyError

PackageSpec = Tuple[str, str, str]
PackageList = Union[List[PackageSpec], Callable[..., List[PackageSpec]]]


@lru_cache(maxsize=None)
def installed_version_satisfies(install_name: str, version_spec: str) -> tuple[bool, str | None]:
    """Check an installed distribution against a version specifier.

    Results are cached for the life of the process.

    Returns
    -------
    tuple
        (meets_requirement, installed_version); ``(False, None)`` when the
        distribution is not installed. An unparsable specifier or version
        counts as satisfied.

    """
    try:
        installed = metadata.version(install_name)
    except metadata.PackageNotFoundError:
        return False, None

    try:
        return version.parse(installed) in SpecifierSet(version_spec), installed
    except (InvalidSpecifier, version.InvalidVersion):
        return True, installed


def find_dependency_problems(
    packages: List[PackageSpec],
) -> tuple[list[tuple[str, str]], list[tuple[str, str, str]], ImportError | None]:
    """Collect missing packages and version mismatches.

    Parameters
    ----------
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples

    Returns
    -------
    tuple
        (missing, version_mismatches, first_import_error)

    """
    missing = []
    version_mismatches = []
    original_error = None

    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            if original_error is None:
                original_error = e
            continue

        if version_spec:
            meets_requirement, installed_version = installed_version_satisfies(install_name, version_spec)
            if not meets_requirement:
                version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

    return missing, version_mismatches, original_error


def requires_dependencies(converter_name: str, packages: PackageList) -> Callable:
    """Check required dependencies and versions before method execution.

    Parameters
    ----------
    converter_name : str
        Name shown in error messages (e.g., "html").
    packages : list of tuple or callable
        Required packages as (install_name, import_name, version_spec) tuples,
        or a callable receiving the decorated method's arguments and returning
        them (for requirements that depend on the instance's options).

    Returns
    -------
    Callable
        Decorated method that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.

    Examples
    --------
        >>> @requires_dependencies("html", lambda self, *args: self.required_packages())
        ... def convert(self, html):
        ...     from bs4 import BeautifulSoup

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            required = packages(*args, **kwargs) if callable(packages) else packages
            missing, version_mismatches, original_error = find_dependency_problems(required)
            if missing or version_mismatches:
                raise DependencyError(
                    converter_name=converter_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    original_import_error=original_error,
                ) from original_error
            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
