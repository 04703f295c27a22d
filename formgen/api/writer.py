"""Persist generated files to the output folder."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List

from .gen_logging import get_logger

logger = get_logger(__name__)


class FileWriter:
    """
    Writes named text blobs under one output folder, overwriting existing
    files. Each write opens, writes and closes its own file; distinct file
    names never share state, so writes may run concurrently.
    """

    def __init__(self, output_folder):
        self.output_folder = Path(output_folder)

    def write(self, file_name: str, text: str) -> Path:
        target = self.output_folder / file_name
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(text)
        logger.info(f"[GENERATED] {target}")
        return target

    def write_all(self, files: Dict[str, str], workers: int = 1) -> List[Path]:
        """
        Write every file and return the written paths in ``files`` order.
        The first failing write propagates its exception.
        """
        self.output_folder.mkdir(parents=True, exist_ok=True)
        items = list(files.items())
        if workers <= 1 or len(items) <= 1:
            return [self.write(name, text) for name, text in items]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda item: self.write(*item), items))
