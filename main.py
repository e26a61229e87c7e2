# main.py
import subprocess
import os
import sys

from reply_assistant.logger import get_logger

logger = get_logger("launcher")

APP_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "frontend", "app.py")


def build_command(extra_args=None):
    """streamlit run for the reply assistant page, with any extra Streamlit flags"""
    return [sys.executable, "-m", "streamlit", "run", APP_PATH, *(extra_args or [])]


def main(argv=None):
    """Run the Streamlit app, passing through flags such as --server.port"""
    command = build_command(sys.argv[1:] if argv is None else argv)
    logger.info("Starting reply assistant: %s", " ".join(command))
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError as e:
        logger.error("Streamlit exited with status %s", e.returncode)
        sys.exit(e.returncode or 1)


if __name__ == "__main__":
    main()
