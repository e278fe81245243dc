"""Font downloader — fetches woff2 files for the site config's fonts from Google Fonts.

Reads displayFont / bodyFont / accentFont from src/site.config.ts and writes
``<slug>-latin-<weight>.woff2`` files into public/fonts/, which is what the
font validator looks for.
"""

import argparse
import re
import sys
from dataclasses import dataclass
from pathlib import Path

import httpx

from sitegate.config import get_config
from sitegate.utils.build_log import BuildLog
from sitegate.utils.http import get_with_retry
from sitegate.validators.fonts import FONTS_DIR, configured_fonts, font_slug
from sitegate.validators.site_config import SITE_CONFIG, read_site_config

_FACE_RE = re.compile(r"@font-face\s*\{([^}]+)\}")
_SRC_RE = re.compile(r"src:\s*url\(([^)]+)\)")
_WEIGHT_RE = re.compile(r"font-weight:\s*(\d+)")
_STYLE_RE = re.compile(r"font-style:\s*(\w+)")
_RANGE_RE = re.compile(r"unicode-range:\s*([^;]+)")

MAIN_LATIN_RANGE = "U+0000-00FF"


@dataclass(frozen=True)
class FontFace:
    url: str
    weight: str
    style: str
    unicode_range: str

    @property
    def is_main_latin(self) -> bool:
        return MAIN_LATIN_RANGE in self.unicode_range

    @property
    def is_latin(self) -> bool:
        return not self.unicode_range or self.is_main_latin or "U+0100" in self.unicode_range


def parse_font_faces(css: str) -> list[FontFace]:
    """Pick one latin face per weight/style from a Google Fonts CSS2 response.

    The main latin block wins over latin-ext when both are present.
    """
    by_key: dict[tuple[str, str], FontFace] = {}
    for block in _FACE_RE.findall(css):
        src = _SRC_RE.search(block)
        weight = _WEIGHT_RE.search(block)
        if not (src and weight):
            continue
        style = _STYLE_RE.search(block)
        unicode_range = _RANGE_RE.search(block)
        face = FontFace(
            url=src.group(1).strip("'\""),
            weight=weight.group(1),
            style=style.group(1) if style else "normal",
            unicode_range=unicode_range.group(1).strip() if unicode_range else "",
        )
        key = (face.weight, face.style)
        if key not in by_key or (face.is_main_latin and not by_key[key].is_main_latin):
            by_key[key] = face
    return [face for face in by_key.values() if face.is_latin]


def build_filename(family: str, weight: str) -> str:
    """'Barlow Condensed', '700' -> 'barlow-condensed-latin-700.woff2'."""
    label = "regular" if weight == "400" else weight
    return f"{font_slug(family)}-latin-{label}.woff2"


def fetch_font_faces(client: httpx.Client, family: str) -> list[FontFace]:
    fonts_config = get_config()["fonts"]
    weights = ";".join(str(w) for w in fonts_config["weights"])
    response = get_with_retry(
        client,
        fonts_config["css_url"],
        params={"family": f"{family}:wght@{weights}", "display": "swap"},
        headers={"User-Agent": fonts_config["user_agent"]},
    )
    return parse_font_faces(response.text)


def download_fonts(
    project_path: Path | str,
    client: httpx.Client | None = None,
    log: BuildLog | None = None,
) -> dict[str, list[str]]:
    """Download every configured font family into public/fonts/.

    Returns the woff2 filenames present for each family. Existing files are
    kept. Raises ValueError when the site config or its font fields are
    missing, and httpx.HTTPError when a family cannot be fetched.
    """
    project = Path(project_path)
    content = read_site_config(project)
    if content is None:
        raise ValueError(f"{SITE_CONFIG.as_posix()} not found in {project}")

    families = list(dict.fromkeys(name for _, name in configured_fonts(content)))
    if not families:
        raise ValueError("No displayFont or bodyFont found in site.config.ts theme")

    fonts_dir = project / FONTS_DIR
    fonts_dir.mkdir(parents=True, exist_ok=True)

    owns_client = client is None
    client = client or httpx.Client(
        timeout=get_config()["fonts"]["timeout"], follow_redirects=True
    )
    downloaded: dict[str, list[str]] = {}
    try:
        for family in families:
            faces = fetch_font_faces(client, family)
            if not faces:
                raise ValueError(f'No woff2 faces found for "{family}" — is the name correct?')

            files = []
            for face in faces:
                filename = build_filename(family, face.weight)
                dest = fonts_dir / filename
                if not dest.exists():
                    dest.write_bytes(get_with_retry(client, face.url).content)
                    print(f"[SiteGate] Downloaded {filename}")
                files.append(filename)
            downloaded[family] = files
            if log:
                log.info("download-fonts", f"{family}: {', '.join(files)}")
    finally:
        if owns_client:
            client.close()

    return downloaded


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="sitegate-fonts",
        description="Download woff2 files for the fonts named in src/site.config.ts.",
    )
    parser.add_argument("--project", type=Path, default=Path.cwd(), help="Project directory.")
    args = parser.parse_args(argv)

    try:
        downloaded = download_fonts(args.project, log=BuildLog(args.project))
    except (ValueError, httpx.HTTPError) as exc:
        print(f"[SiteGate] ✗ Font download failed: {exc}", file=sys.stderr)
        sys.exit(1)

    for family, files in downloaded.items():
        print(f"[SiteGate] ✓ {family}: {len(files)} file(s)")


if __name__ == "__main__":
    main()
