"""Content-addressed storage for externalised SVG icons."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from ..logging import get_logger
from ..models import AssetWrite


@dataclass(frozen=True)
class AssetFailure:
    """An icon that could not be written; its reference is kept regardless."""

    filename: str
    error: str


class AssetStore:
    """Queues one write per unique icon and drains the queue on :meth:`flush`.

    ``add`` returns the public reference immediately so rendering never waits
    on disk. Identical content maps to the same file no matter how many call
    sites or components reference it.
    """

    def __init__(self, output_dir: Path | None = None, public_prefix: str = "svgs") -> None:
        self.output_dir = output_dir
        self._public_prefix = public_prefix.strip("/")
        self._known: Dict[str, AssetWrite] = {}
        self._pending: List[AssetWrite] = []
        self._written: List[AssetWrite] = []
        self.failures: List[AssetFailure] = []
        self.logger = get_logger("assets")

    def add(self, content: str) -> str:
        """Register SVG markup and return the path the generated code should use."""
        digest = hashlib.md5(content.encode("utf-8")).hexdigest()
        asset = self._known.get(digest)
        if asset is None:
            asset = AssetWrite(digest=digest, filename=f"icon-{digest}.svg", content=content)
            self._known[digest] = asset
            self._pending.append(asset)
        return self.public_path(asset.filename)

    def public_path(self, filename: str) -> str:
        if self._public_prefix:
            return f"/{self._public_prefix}/{filename}"
        return f"/{filename}"

    def drain(self) -> List[AssetWrite]:
        """Return and clear the writes queued since the last drain or flush."""
        pending, self._pending = self._pending, []
        return pending

    def flush(self) -> List[AssetWrite]:
        """Write every queued asset; failures are logged and recorded."""
        pending = self.drain()
        if self.output_dir is None:
            self._written.extend(pending)
            return pending
        for asset in pending:
            target = self.output_dir / asset.filename
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(asset.content, encoding="utf-8")
            except OSError as exc:
                self.logger.error("Error writing SVG file %s: %s", target, exc)
                self.failures.append(AssetFailure(filename=asset.filename, error=str(exc)))
                continue
            self._written.append(asset)
        return pending

    def get(self, digest: str) -> Optional[AssetWrite]:
        return self._known.get(digest)

    @property
    def pending(self) -> List[AssetWrite]:
        return list(self._pending)

    @property
    def written(self) -> List[AssetWrite]:
        return list(self._written)

    def __len__(self) -> int:
        return len(self._known)


__all__ = ["AssetFailure", "AssetStore"]
