"""Convention image folders must hold real generated images, not placeholder stubs.

A placement folder maps to a usage slot on the site (``home-hero/``,
``services/<slug>/card/`` ...). Template projects ship tiny stub files in each
folder; a file only counts as a real image when it is larger than
``stub_min_bytes``.
"""

from pathlib import Path
from typing import Iterable, Optional

from sitegate.config import get_config
from sitegate.utils.results import ErrorKind, ValidationResult

IMAGES_BASE = Path("src") / "assets" / "images"


def _image_files(folder: Path, extensions: set[str]) -> list[Path]:
    return sorted(
        p for p in folder.iterdir() if p.is_file() and p.suffix.lower() in extensions
    )


def count_images(folder: Path) -> tuple[int, int]:
    """Return (real, stub) image counts for a folder. Raises OSError if unreadable."""
    config = get_config()
    extensions = {ext.lower() for ext in config["image_extensions"]}
    threshold = config["stub_min_bytes"]
    real = stubs = 0
    for path in _image_files(folder, extensions):
        if path.stat().st_size > threshold:
            real += 1
        else:
            stubs += 1
    return real, stubs


def _check_service_folder(result: ValidationResult, folder: Path, label: str) -> None:
    try:
        real, stubs = count_images(folder)
    except OSError as exc:
        result.add(ErrorKind.MISSING_ASSET, f"Cannot read {label}/: {exc}")
        return
    if real == 0:
        result.add(
            ErrorKind.MISSING_ASSET,
            f"No real images in {label}/ ({stubs} placeholder stubs). AI images must be generated.",
        )


def validate_image_folders(
    project_path: Path | str, service_slugs: Optional[Iterable[str]] = None
) -> ValidationResult:
    """Check the required placement folders and the service placement folders.

    Without ``service_slugs`` only the service folders that exist are checked.
    With them, every placement folder of every listed slug must exist.
    """
    config = get_config()
    base = Path(project_path) / IMAGES_BASE
    result = ValidationResult("images")

    for name in config["required_image_folders"]:
        folder = base / name
        rel = (IMAGES_BASE / name).as_posix()
        if not folder.is_dir():
            result.add(ErrorKind.MISSING_ASSET, f"Required image folder missing: {rel}/")
            continue
        try:
            real, stubs = count_images(folder)
        except OSError as exc:
            result.add(ErrorKind.MISSING_ASSET, f"Cannot read {rel}/: {exc}")
            continue
        if real == 0:
            result.add(
                ErrorKind.MISSING_ASSET,
                f"No real images in {rel}/ ({stubs} placeholder stubs <= "
                f"{config['stub_min_bytes']} bytes). AI images must be generated before building.",
            )

    services = base / "services"
    if service_slugs is not None:
        for slug in service_slugs:
            for placement in config["service_placements"]:
                folder = services / slug / placement
                label = f"services/{slug}/{placement}"
                if not folder.is_dir():
                    result.add(ErrorKind.MISSING_ASSET, f"Missing service image folder: {label}/")
                    continue
                _check_service_folder(result, folder, label)
        return result

    if not services.is_dir():
        return result
    try:
        slug_dirs = sorted(p for p in services.iterdir() if p.is_dir())
    except OSError as exc:
        result.add(ErrorKind.MISSING_ASSET, f"Cannot read {(IMAGES_BASE / 'services').as_posix()}/: {exc}")
        return result
    for slug_dir in slug_dirs:
        for placement in config["service_placements"]:
            folder = slug_dir / placement
            if folder.is_dir():
                _check_service_folder(result, folder, f"services/{slug_dir.name}/{placement}")

    return result
