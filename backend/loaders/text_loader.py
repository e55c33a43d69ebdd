"""
Text Loader Module
Reads exported chat logs (.txt) from disk.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class TextLoadError(Exception):
    """Custom exception for chat-log loading errors."""
    pass


def load_chat_log(file_path: str) -> str:
    """
    Read a chat export as text.

    Args:
        file_path: Path to the .txt export

    Returns:
        File contents with any UTF-8 byte-order mark removed

    Raises:
        TextLoadError: If the file is missing, not a .txt file, undecodable or empty
    """
    log_path = Path(file_path)
    if not log_path.exists():
        logger.error(f"Chat log not found: {file_path}")
        raise TextLoadError(f"Chat log not found: {file_path}")

    if not log_path.suffix.lower() == '.txt':
        logger.error(f"File is not a text export: {file_path}")
        raise TextLoadError(f"File is not a text export: {file_path}")

    try:
        text = log_path.read_text(encoding='utf-8-sig')
    except UnicodeDecodeError as e:
        logger.error(f"Chat log is not valid UTF-8: {file_path}")
        raise TextLoadError(f"Chat log is not valid UTF-8: {file_path}") from e
    except OSError as e:
        logger.error(f"Unexpected error reading {file_path}: {e}", exc_info=True)
        raise TextLoadError(f"Failed to read chat log {file_path}: {e}") from e

    if not text.strip():
        raise TextLoadError(f"Chat log is empty: {file_path}")

    logger.info(f"Loaded chat log: {file_path} ({len(text.splitlines())} lines)")
    return text


def load_multiple_logs(file_paths: list[str]) -> str:
    """
    Load and concatenate several chat exports, in the given order.

    Files that fail to load are skipped with a warning.

    Raises:
        TextLoadError: If no paths are given or every file fails
    """
    if not file_paths:
        logger.error("No chat logs provided")
        raise TextLoadError("No chat logs provided")

    all_text = []
    failed_files = []

    for idx, file_path in enumerate(file_paths, 1):
        try:
            logger.info(f"Processing chat log {idx}/{len(file_paths)}: {file_path}")
            all_text.append(load_chat_log(file_path))
        except TextLoadError as e:
            logger.error(f"Failed to load {file_path}: {e}")
            failed_files.append((file_path, str(e)))

    if not all_text:
        raise TextLoadError(f"Failed to load any chat logs. All {len(file_paths)} files failed.")

    if failed_files:
        logger.warning(
            f"Loaded {len(all_text)}/{len(file_paths)} chat logs. "
            f"Failed: {', '.join(f[0] for f in failed_files)}"
        )

    return "\n".join(text.rstrip("\n") for text in all_text)
