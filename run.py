# -*- coding: utf-8 -*-

"""
Main entry point: render a template or an exported document to an HTML preview.

Usage: python run.py [TEMPLATE_NAME | DOCUMENT.json] [OUTPUT.html]
"""

import logging
import sys
from pathlib import Path

from site_builder.app import create_editor
from site_builder.logging_config import setup_logging
from site_builder.version import get_app_version


def main(argv=None):
    """
    Configure logging, build the editor, load the requested document and write the preview.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    setup_logging()
    logging.info("===== Site Builder %s =====", get_app_version())

    source = args[0] if args else None
    output = Path(args[1]) if len(args) > 1 else Path("preview.html")

    editor = create_editor()
    if source:
        if source.endswith(".json"):
            result = editor.import_file(source)
        else:
            result = editor.load_template(source)
        if not result.success:
            print(f"Error: {result.message}", file=sys.stderr)
            return 1

    preview = editor.render_preview()
    if not preview.success:
        print(f"Error: {preview.message}", file=sys.stderr)
        return 1
    output.write_text(preview.content, encoding="utf-8")
    print(f"Wrote {output} ({len(editor.forest)} blocks)")
    return 0


if __name__ == '__main__':
    status = main()
    logging.info("===== Application terminated =====")
    sys.exit(status)
