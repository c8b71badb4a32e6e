"""
Text fixups applied to generated site output before it is deployed.
"""
import glob
import os
from typing import List

from loguru import logger

DOUBLE_SLASH_FONTS = './/fonts'
FONTS = './fonts'


def fix_font_paths(build_dir: str) -> List[str]:
    """
    Rewrite ``.//fonts`` to ``./fonts`` in the gitbook stylesheets of a build.

    Args:
        build_dir: Root of the generated site

    Returns:
        Paths of the stylesheets that were rewritten
    """
    pattern = os.path.join(build_dir, 'gitbook', '*.css')
    changed = []

    for css_path in sorted(glob.glob(pattern)):
        with open(css_path, 'r', encoding='utf-8') as f:
            content = f.read()

        if DOUBLE_SLASH_FONTS not in content:
            continue

        logger.info(f"Removing double slash from {css_path}")
        with open(css_path, 'w', encoding='utf-8') as f:
            f.write(content.replace(DOUBLE_SLASH_FONTS, FONTS))
        changed.append(css_path)

    return changed
