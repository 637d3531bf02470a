#!/usr/bin/env python3
from __future__ import annotations

import argparse
import html
import re
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if (SCRIPT_DIR / "images").exists():
    BASE_DIR = SCRIPT_DIR
else:
    BASE_DIR = SCRIPT_DIR.parent

IMAGES_DIR = BASE_DIR / "images" / "projects"
PROJECTS_DIR = BASE_DIR / "pages" / "projects"

# URL prefix of the project media, relative to the generated page
MEDIA_ROOT = "../assets/projects"

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")
VIDEO_EXTENSIONS = (".mp4",)
MEDIA_EXTENSIONS = IMAGE_EXTENSIONS + VIDEO_EXTENSIONS

GALLERY_SLOTS = 4
DEFAULT_HERO_IMAGE_INDEX = 0
STUDIO_NAME = "Interactive Nature Studio"
PREFIX = "[INS]"

USAGE_EXAMPLES = """examples:
  generate_project_pages.py                          process all folders
  generate_project_pages.py Memorii                  process only the Memorii folder
  generate_project_pages.py --hero=image.jpg Memorii use a specific hero image
"""


def _escape(text: str) -> str:
    return html.escape(text or "", quote=True)


def _extension(filename: str) -> str:
    return Path(filename).suffix.lower()


def project_slug(folder_name: str) -> str:
    return re.sub(r"\s+", "-", folder_name.lower())


def display_name(folder_name: str) -> str:
    return folder_name.replace("-", " ")


def list_media_files(selected_dir: Path) -> list[str]:
    """Media entries of a ``selected`` folder in directory listing order."""
    return [entry.name for entry in selected_dir.iterdir() if _extension(entry.name) in MEDIA_EXTENSIONS]


def filter_images(media_files: list[str]) -> list[str]:
    return [name for name in media_files if _extension(name) in IMAGE_EXTENSIONS]


def find_hero_video(media_files: list[str]) -> str | None:
    for name in media_files:
        if _extension(name) in VIDEO_EXTENSIONS and "hero" in name.lower():
            return name
    return None


def select_hero_image(image_files: list[str], custom_hero: str | None = None) -> str:
    if custom_hero and custom_hero in image_files:
        print(f"{PREFIX} Using custom hero image: {custom_hero}")
        return custom_hero
    if custom_hero:
        print(
            f"Warning: Custom hero image \"{custom_hero}\" not found in folder. Using default.",
            file=sys.stderr,
        )
    return image_files[DEFAULT_HERO_IMAGE_INDEX]


def _media_src(folder_name: str, filename: str) -> str:
    return f"{MEDIA_ROOT}/{folder_name}/selected/{filename}"


def render_gallery(folder_name: str, display: str, image_files: list[str]) -> str:
    items: list[str] = []
    gallery_images = image_files[:GALLERY_SLOTS]
    for index, filename in enumerate(gallery_images, start=1):
        src = _escape(_media_src(folder_name, filename))
        alt = _escape(f"{display} - {index}")
        items.append(
            f"""                <div class="gallery-item">
                    <img src="{src}" alt="{alt}">
                </div>
"""
        )
    for index in range(len(gallery_images) + 1, GALLERY_SLOTS + 1):
        items.append(
            f"""                <div class="gallery-item">
                    <img src="[GALLERY_IMAGE_{index}]" alt="[GALLERY_CAPTION_{index}]">
                </div>
"""
        )
    return "".join(items)


def _render_hero_media(folder_name: str, display: str, hero_image: str, hero_video: str | None) -> str:
    if hero_video:
        return f"""<!-- Project video -->
            <video autoplay muted loop>
                <source src="{_escape(_media_src(folder_name, hero_video))}" type="video/mp4">
            </video>"""
    return f"""<!-- Project image -->
            <img src="{_escape(_media_src(folder_name, hero_image))}" alt="{_escape(display)}">"""


def render_project_page(folder_name: str, hero_image: str, media_files: list[str]) -> str:
    display = display_name(folder_name)
    hero_video = find_hero_video(media_files)
    hero_media = _render_hero_media(folder_name, display, hero_image, hero_video)
    gallery_html = render_gallery(folder_name, display, filter_images(media_files))
    title = _escape(display)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title} | {STUDIO_NAME}</title>

    <!-- Google Fonts -->
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
    <link href="https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@300;400;500;600;700&display=swap" rel="stylesheet">

    <!-- CSS Files -->
    <link rel="stylesheet" href="../css/main.css">
    <link rel="stylesheet" href="../css/components.css">
    <link rel="stylesheet" href="../css/animations.css">
    <link rel="stylesheet" href="../css/responsive.css">
    <link rel="stylesheet" href="../css/project.css">
</head>
<body>
    <div class="cursor"></div>

    <svg class="bg-lines" width="100%" height="100%" preserveAspectRatio="none">
        <!-- Lines will be generated by JS -->
    </svg>

    <svg width="0" height="0" style="position: absolute;">
        <defs>
            <linearGradient id="iridescent-gradient" x1="0%" y1="0%" x2="100%" y2="0%">
                <stop offset="0%" stop-color="#C4D4DB" />
                <stop offset="25%" stop-color="#9AC2C9" />
                <stop offset="50%" stop-color="#B19CD9" />
                <stop offset="75%" stop-color="#93B5C6" />
                <stop offset="100%" stop-color="#BFD8BD" />
            </linearGradient>
        </defs>
    </svg>

    <header>
        <div class="logo">
            <a href="../index.html">
                <img src="../assets/images/InteractiveNatureLogo.png" alt="Interactive Nature Logo">
            </a>
        </div>
        <nav>
            <ul>
                <li><a href="../index.html#services">Services</a></li>
                <li><a href="../index.html#work">Work</a></li>
                <li><a href="../index.html#about">About</a></li>
                <li><a href="../index.html#contact">Contact</a></li>
            </ul>
        </nav>
    </header>

    <section class="project-hero">
        <div class="project-hero-media">
            {hero_media}

            <div class="hero-overlay"></div>
        </div>
        <div class="project-hero-content">
            <h1>{title}</h1>
            <p class="project-subtitle">Interactive Experience</p>
        </div>
    </section>

    <section class="project-overview">
        <div class="container">
            <div class="project-info">
                <div class="project-info-left">
                    <h2>Project Overview</h2>
                    <p>This is an automatically generated project page for {title}. Please update this description with details about the project.</p>
                    <p>You can add multiple paragraphs to describe the project's concept, goals, and outcomes.</p>
                </div>
                <div class="project-info-right">
                    <div class="project-meta">
                        <div class="meta-item">
                            <h3>Client</h3>
                            <p>Client Name</p>
                        </div>
                        <div class="meta-item">
                            <h3>Year</h3>
                            <p>2025</p>
                        </div>
                        <div class="meta-item">
                            <h3>Services</h3>
                            <p>Interactive Installation</p>
                        </div>
                    </div>
                </div>
            </div>
        </div>
    </section>

    <section class="project-gallery">
        <div class="container">
            <h2>Gallery</h2>
            <div class="gallery-grid">
{gallery_html}            </div>
        </div>
    </section>

    <section class="next-project">
        <div class="container">
            <h2>Next Project</h2>
            <a href="#" class="next-project-link">
                <div class="next-project-preview">
                    <img src="../assets/images/portfolio/lightForest.jpg" alt="Next Project">
                    <div class="next-project-overlay">
                        <h3>Next Project</h3>
                        <span class="next-arrow">&rarr;</span>
                    </div>
                </div>
            </a>
        </div>
    </section>

    <footer>
        <div class="container">
            <div class="footer-links">
                <a href="../index.html#services">Services</a>
                <a href="../index.html#work">Work</a>
                <a href="../index.html#about">About</a>
                <a href="../index.html#contact">Contact</a>
            </div>
            <p>&copy; 2025 {STUDIO_NAME}. All rights reserved.</p>
        </div>
    </footer>

    <script type="module" src="../js/main.js"></script>
    <script type="module" src="../js/project.js"></script>
</body>
</html>
"""


def process_image_folder(
    folder_name: str,
    images_dir: Path = IMAGES_DIR,
    output_dir: Path = PROJECTS_DIR,
    custom_hero: str | None = None,
) -> Path | None:
    """Render the project page for one image folder.

    Returns the written page, or None when the folder was skipped. A folder
    needs at least one image even when it carries a hero video.
    """
    print(f"{PREFIX} Processing folder: {folder_name}")
    selected_dir = images_dir / folder_name / "selected"
    if not selected_dir.is_dir():
        print(f"{PREFIX} No \"selected\" subfolder found in {folder_name}, skipping.")
        return None

    media_files = list_media_files(selected_dir)
    if not media_files:
        print(f"{PREFIX} No media files found in {folder_name}/selected, skipping.")
        return None

    image_files = filter_images(media_files)
    if not image_files:
        print(f"{PREFIX} No image files found in {folder_name} for hero image, skipping.")
        return None

    hero_image = select_hero_image(image_files, custom_hero)
    page = render_project_page(folder_name, hero_image, media_files)

    output_path = output_dir / f"{project_slug(folder_name)}.html"
    output_path.write_text(page, encoding="utf-8")
    print(f"{PREFIX} Created project page: {output_path}")
    return output_path


def generate_all(
    images_dir: Path = IMAGES_DIR,
    output_dir: Path = PROJECTS_DIR,
    custom_hero: str | None = None,
) -> list[Path]:
    if not images_dir.is_dir():
        raise SystemExit(f"Images directory not found: {images_dir}")
    folders = [entry.name for entry in images_dir.iterdir() if entry.is_dir()]
    print(f"{PREFIX} Found {len(folders)} image folders to process.")
    written: list[Path] = []
    for folder_name in folders:
        path = process_image_folder(folder_name, images_dir, output_dir, custom_hero)
        if path is not None:
            written.append(path)
    return written


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate project pages from image folders.",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("folder", nargs="?", help="Process only this image folder.")
    parser.add_argument("--hero", metavar="FILENAME", help="Use a specific hero image filename.")
    parser.add_argument(
        "--all",
        action="store_true",
        help="Process all image folders (default if no folder is specified).",
    )
    parser.add_argument("--images-dir", type=Path, default=IMAGES_DIR, help="Root of the project image folders.")
    parser.add_argument("--output-dir", type=Path, default=PROJECTS_DIR, help="Where project pages are written.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args, _unknown = _build_parser().parse_known_args(argv)

    output_dir: Path = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    if args.hero:
        print(f"{PREFIX} Using custom hero image: {args.hero}")

    if args.folder:
        print(f"{PREFIX} Processing specific folder: {args.folder}")
        folder_path = args.images_dir / args.folder
        if not folder_path.is_dir():
            print(f"Error: Folder \"{args.folder}\" not found in {args.images_dir} directory.", file=sys.stderr)
            return 1
        process_image_folder(args.folder, args.images_dir, output_dir, args.hero)
        print(f"{PREFIX} Processed folder: {args.folder}")
    else:
        generate_all(args.images_dir, output_dir, args.hero)

    print(f"{PREFIX} Project page generation complete!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
