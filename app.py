"""
PPT Studio
Flask backend for topic-based PPT generation
"""

from flask import Flask, jsonify, request, send_file
import os
import time
import asyncio
import logging
import threading
from pathlib import Path

from dotenv import load_dotenv

from ppt_generator import PPTGenerator
from ppt_studio import (
    THEME_CONFIGS,
    LayoutRenderer,
    PPTAnalyzer,
    Presentation,
    PresentationDataError,
    SlideGenerator,
    SlideLayout,
    Theme,
)
from utils import build_download_name, format_size, setup_logger

load_dotenv('.env.ppt')

logger = logging.getLogger(__name__)

app = Flask(__name__)

PPTX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.presentationml.presentation'

# Directories
OUTPUT_DIR = Path(os.getenv("PPT_OUTPUT_DIR", "output"))

# File Cleanup Configuration (Minutes)
FILE_LIFETIME_MINUTES = int(os.getenv("FILE_LIFETIME_MINUTES", "30"))

# Package loggers, the top-level writer/helper modules and this app
APP_LOGGERS = ("ppt_studio", "ppt_generator", "utils", __name__)

DEFAULT_SLIDE_COUNT = 10
MAX_SLIDE_COUNT = 50


def cleanup_old_files(output_dir: Path = OUTPUT_DIR, lifetime_minutes: int = FILE_LIFETIME_MINUTES) -> int:
    """Delete generated PPT files older than lifetime_minutes; returns how many were removed"""
    removed = 0
    if not output_dir.exists():
        return removed

    now = time.time()
    for filepath in output_dir.glob("*.pptx"):
        file_age_minutes = (now - filepath.stat().st_mtime) / 60
        if file_age_minutes > lifetime_minutes:
            filepath.unlink(missing_ok=True)
            removed += 1
            logger.info(f"🧹 Auto-cleaned old file: {filepath.name} (Age: {int(file_age_minutes)}m)")
    return removed


def configure_logging(log_dir=None):
    """Attach file and console handlers to every logger this service writes to"""
    return [setup_logger(name, log_dir=log_dir) for name in APP_LOGGERS]


def _cleanup_loop():
    while True:
        try:
            cleanup_old_files()
        except Exception as e:
            logger.error(f"⚠️ Cleanup thread error: {e}")
        time.sleep(600)  # Check every 10 minutes


def start_cleanup_thread() -> threading.Thread:
    cleanup_thread = threading.Thread(target=_cleanup_loop, daemon=True)
    cleanup_thread.start()
    return cleanup_thread


# ============================================================================
# ROUTES
# ============================================================================

@app.route('/ping')
def ping():
    """Health check endpoint"""
    return jsonify({"status": "ok", "message": "I'm alive!"})


@app.route('/api/themes')
def get_themes():
    """List theme palettes"""
    themes = {name: config.to_dict() for name, config in THEME_CONFIGS.items()}
    return jsonify({"success": True, "themes": themes})


@app.route('/api/layouts')
def get_layouts():
    """List supported layout tags"""
    return jsonify({
        "success": True,
        "layouts": [layout.value for layout in SlideLayout],
        "default": SlideLayout.CONTENT_SLIDE.value,
    })


# ============================================================================
# API ENDPOINTS
# ============================================================================

class RequestError(ValueError):
    """Bad input from the client; reported as HTTP 400"""


def _as_flag(value) -> bool:
    """JSON booleans and form strings like "false"/"on" alike"""
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _read_generation_request(data):
    topic = str(data.get('topic', '') or '').strip()
    if not topic:
        raise RequestError("Topic is required")

    try:
        slide_count = int(data.get('slide_count', DEFAULT_SLIDE_COUNT))
    except (TypeError, ValueError):
        raise RequestError("slide_count must be an integer")
    if not 1 <= slide_count <= MAX_SLIDE_COUNT:
        raise RequestError(f"slide_count must be between 1 and {MAX_SLIDE_COUNT}")

    theme = str(data.get('theme', Theme.PROFESSIONAL.value) or Theme.PROFESSIONAL.value).lower()
    include_images = _as_flag(data.get('include_images', False))
    return topic, slide_count, theme, include_images


def _generate_presentation(data) -> Presentation:
    topic, slide_count, theme, include_images = _read_generation_request(data)
    generator = SlideGenerator()
    return asyncio.run(generator.generate_presentation(
        topic=topic,
        slide_count=slide_count,
        theme=theme,
        include_images=include_images,
    ))


def _write_pptx(presentation: Presentation) -> Path:
    document = LayoutRenderer().render(presentation)

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    output_path = OUTPUT_DIR / build_download_name(presentation.title)
    PPTGenerator().generate_ppt(document, str(output_path))
    logger.info(f"   ✅ {output_path.name} ({format_size(output_path.stat().st_size)})")
    return output_path


def _send_pptx(output_path: Path):
    return send_file(
        str(output_path.resolve()),
        mimetype=PPTX_MIMETYPE,
        as_attachment=True,
        download_name=output_path.name
    )


def _load_presentation(data) -> Presentation:
    return Presentation.from_dict(data.get('presentation'))


@app.route('/api/generate-content', methods=['POST'])
def generate_content():
    """
    Generate normalized slide content for a topic.
    Returns the Presentation as JSON so the caller can persist and re-render it.
    """
    try:
        data = request.get_json(silent=True) or request.form
        presentation = _generate_presentation(data)
        return jsonify({
            "success": True,
            "presentation": presentation.to_dict(),
            "include_images": _as_flag(data.get('include_images', False)),
        })

    except RequestError as e:
        return jsonify({"success": False, "error": str(e)}), 400
    except Exception as e:
        logger.exception("Error generating content")
        return jsonify({"success": False, "error": str(e)}), 500


@app.route('/api/generate-ppt', methods=['POST'])
def generate_ppt():
    """
    Generate PPT from topic
    Flow: Topic → AI generates slides → normalize → render → .pptx download
    """
    try:
        data = request.get_json(silent=True) or request.form
        presentation = _generate_presentation(data)
        return _send_pptx(_write_pptx(presentation))

    except RequestError as e:
        return jsonify({"success": False, "error": str(e)}), 400
    except Exception as e:
        logger.exception("Error generating PPT")
        return jsonify({"success": False, "error": str(e)}), 500


@app.route('/api/render', methods=['POST'])
def render_ppt():
    """Re-render a persisted Presentation into a .pptx without calling the LLM"""
    try:
        data = request.get_json(silent=True) or {}
        presentation = _load_presentation(data)
        return _send_pptx(_write_pptx(presentation))

    except PresentationDataError as e:
        return jsonify({"success": False, "error": str(e), "issues": e.issues}), 400
    except Exception as e:
        logger.exception("Error rendering PPT")
        return jsonify({"success": False, "error": str(e)}), 500


@app.route('/api/preview', methods=['POST'])
def preview_ppt():
    """Render a persisted Presentation and report what ended up on each slide"""
    try:
        data = request.get_json(silent=True) or {}
        presentation = _load_presentation(data)
        document = LayoutRenderer().render(presentation)

        analyzer = PPTAnalyzer()
        if not analyzer.load(PPTGenerator().to_bytes(document)):
            return jsonify({"success": False, "error": "Failed to read generated deck"}), 500

        summary = analyzer.summarize()
        return jsonify({
            "success": True,
            "slide_count": summary["slide_count"],
            "slides": summary["slides"],
            "html": analyzer.generate_html_preview(),
        })

    except PresentationDataError as e:
        return jsonify({"success": False, "error": str(e), "issues": e.issues}), 400
    except Exception as e:
        logger.exception("Error building preview")
        return jsonify({"success": False, "error": str(e)}), 500


# ============================================================================
# RUN
# ============================================================================

if __name__ == '__main__':
    configure_logging()
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    start_cleanup_thread()

    print("\n" + "="*60)
    print("📊 PPT STUDIO")
    print("="*60)
    print("\n🌐 Open: http://localhost:5000")
    print("💡 POST a topic to /api/generate-ppt to get a deck!")
    print("\n" + "="*60 + "\n")

    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=False)
