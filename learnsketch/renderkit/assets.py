from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Set

from PyQt6 import QtCore, QtGui, QtNetwork, QtSvg

logger = logging.getLogger(__name__)

DEFAULT_ASSET_ROOT = Path(".")
PRESS_START_2P_URL = "https://cdn.jsdelivr.net/gh/StriveMath/fonts/Press_Start_2P/PressStart2P-Regular.ttf"
FONT_ALIASES = {"Press Start 2P": PRESS_START_2P_URL}

Scheduler = Callable[[Callable[[], None]], None]


class AssetKind(str, Enum):
    IMAGE = "image"
    SOUND = "sound"
    FONT = "font"


def is_remote(path: str) -> bool:
    return str(path).lower().startswith(("http://", "https://"))


def _qt_later(callback: Callable[[], None]) -> None:
    QtCore.QTimer.singleShot(0, callback)


class AssetHandle:
    """What ``load_image``/``load_font``/``load_sound`` hand back right away.

    ``value`` is ``None`` until the registry stores the asset under ``key``;
    after that attribute access falls through to it, so ``img.width()`` works
    on a loaded image handle.
    """

    def __init__(self, registry: "AssetRegistry", kind: AssetKind, key: str):
        self.registry = registry
        self.kind = kind
        self.key = key

    @property
    def value(self) -> Any:
        return self.registry.get(self.key)

    @property
    def loaded(self) -> bool:
        return self.value is not None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name in ("registry", "kind", "key"):
            raise AttributeError(name)
        value = self.value
        if value is None:
            raise AttributeError(f"asset {self.key!r} has not loaded yet")
        return getattr(value, name)

    def __repr__(self) -> str:
        state = "loaded" if self.loaded else "pending"
        return f"AssetHandle({self.kind.value}, {self.key!r}, {state})"


def unwrap(asset: Any, registry: Optional["AssetRegistry"] = None) -> Any:
    """Turn a handle, or a registry key when ``registry`` is given, into the asset itself."""
    if isinstance(asset, AssetHandle):
        return asset.value
    if registry is not None and isinstance(asset, str) and asset in registry:
        return registry[asset]
    return asset


class AssetResolver:
    """Resolves sketch-relative asset paths into absolute paths under the asset root."""

    def __init__(self, asset_root: Path = DEFAULT_ASSET_ROOT):
        self.asset_root = Path(asset_root).resolve()

    def resolve(self, rel_path: str) -> Optional[Path]:
        if not rel_path:
            return None
        path_obj = Path(rel_path)
        # Allow absolute paths as-is.
        if path_obj.is_absolute():
            return path_obj if path_obj.exists() else None

        candidate = (self.asset_root / path_obj).resolve()
        try:
            candidate.relative_to(self.asset_root)
        except ValueError:
            return None
        return candidate if candidate.exists() else None


class AssetRegistry:
    """Keyed store of loaded images, sounds and fonts plus the pending-load counters.

    Every ``load_*`` call bumps a counter that only drops when the resource has
    arrived. Loads issued while ``preloading`` is set count against the preload
    counter instead. ``assets_loaded()`` is true when both are zero.
    """

    def __init__(
        self,
        resolver: Optional[AssetResolver] = None,
        schedule: Optional[Scheduler] = None,
    ):
        self.resolver = resolver or AssetResolver()
        self.assets: Dict[str, Any] = {}
        self.failed: Dict[str, str] = {}
        self.preloading = False
        self._schedule: Scheduler = schedule or _qt_later
        self._remaining = 0
        self._preload_remaining = 0
        self._network: Optional[QtNetwork.QNetworkAccessManager] = None
        self._replies: Set[QtNetwork.QNetworkReply] = set()

    # -- gate --------------------------------------------------------------
    def assets_loaded(self) -> bool:
        return self._preload_remaining + self._remaining == 0

    @property
    def pending(self) -> int:
        return self._remaining

    @property
    def preload_pending(self) -> int:
        return self._preload_remaining

    def __getitem__(self, key: str) -> Any:
        return self.assets[key]

    def __contains__(self, key: object) -> bool:
        return key in self.assets

    def get(self, key: str, default: Any = None) -> Any:
        return self.assets.get(key, default)

    # -- loaders -----------------------------------------------------------
    def load_image(self, path: str, key: str) -> AssetHandle:
        done = self._begin()

        def _store(data: bytes) -> None:
            image = _decode_image(path, data)
            if image is None or image.isNull():
                self._fail(AssetKind.IMAGE, path, key, "image data could not be decoded")
                return
            self.assets[key] = image
            done(AssetKind.IMAGE, key)

        self._fetch(AssetKind.IMAGE, path, key, _store)
        return AssetHandle(self, AssetKind.IMAGE, key)

    def load_font(self, path: str, key: str) -> AssetHandle:
        done = self._begin()
        source = FONT_ALIASES.get(path, path)

        def _store(data: bytes) -> None:
            font_id = QtGui.QFontDatabase.addApplicationFontFromData(QtCore.QByteArray(data))
            families = QtGui.QFontDatabase.applicationFontFamilies(font_id) if font_id >= 0 else []
            if not families:
                self._fail(AssetKind.FONT, source, key, "font data could not be registered")
                return
            self.assets[key] = families[0]
            done(AssetKind.FONT, key)

        self._fetch(AssetKind.FONT, source, key, _store)
        return AssetHandle(self, AssetKind.FONT, key)

    def load_sound(self, path: str, key: str) -> AssetHandle:
        from PyQt6 import QtMultimedia

        done = self._begin()
        if is_remote(path):
            url = QtCore.QUrl(path)
        else:
            resolved = self.resolver.resolve(path)
            if resolved is None:
                self._schedule(lambda: self._fail(AssetKind.SOUND, path, key, "file not found"))
                return AssetHandle(self, AssetKind.SOUND, key)
            url = QtCore.QUrl.fromLocalFile(str(resolved))

        effect = QtMultimedia.QSoundEffect()
        Status = QtMultimedia.QSoundEffect.Status

        def _on_status() -> None:
            status = effect.status()
            if status == Status.Ready:
                effect.statusChanged.disconnect(_on_status)
                done(AssetKind.SOUND, key)
            elif status == Status.Error:
                effect.statusChanged.disconnect(_on_status)
                self._fail(AssetKind.SOUND, path, key, "sound could not be decoded")

        effect.statusChanged.connect(_on_status)
        effect.setSource(url)
        self.assets[key] = effect
        return AssetHandle(self, AssetKind.SOUND, key)

    # -- internals ---------------------------------------------------------
    def _begin(self) -> Callable[[AssetKind, str], None]:
        preload = self.preloading
        if preload:
            self._preload_remaining += 1
        else:
            self._remaining += 1
        finished = False

        def _done(kind: AssetKind, key: str) -> None:
            nonlocal finished
            if finished:
                return
            finished = True
            if preload:
                self._preload_remaining -= 1
            else:
                self._remaining -= 1
            logger.info("asset loaded kind=%s key=%s pending=%d", kind.value, key, self.pending)

        return _done

    def _fail(self, kind: AssetKind, path: str, key: str, reason: str) -> None:
        # The counter is left untouched so the redraw gate stays closed.
        self.failed[key] = f"{kind.value} {path!r}: {reason}"
        logger.error("asset failed kind=%s key=%s path=%s reason=%s", kind.value, key, path, reason)

    def _fetch(self, kind: AssetKind, path: str, key: str, on_bytes: Callable[[bytes], None]) -> None:
        if is_remote(path):
            self._schedule(lambda: self._fetch_remote(kind, path, key, on_bytes))
            return

        def _read_local() -> None:
            resolved = self.resolver.resolve(path)
            if resolved is None:
                self._fail(kind, path, key, "file not found")
                return
            try:
                data = resolved.read_bytes()
            except OSError as exc:
                self._fail(kind, path, key, str(exc))
                return
            on_bytes(data)

        self._schedule(_read_local)

    def _fetch_remote(self, kind: AssetKind, url: str, key: str, on_bytes: Callable[[bytes], None]) -> None:
        if self._network is None:
            self._network = QtNetwork.QNetworkAccessManager()
        reply = self._network.get(QtNetwork.QNetworkRequest(QtCore.QUrl(url)))
        self._replies.add(reply)

        def _finished() -> None:
            self._replies.discard(reply)
            if reply.error() != QtNetwork.QNetworkReply.NetworkError.NoError:
                self._fail(kind, url, key, reply.errorString())
            else:
                on_bytes(bytes(reply.readAll()))
            reply.deleteLater()

        reply.finished.connect(_finished)


def _decode_image(path: str, data: bytes) -> Optional[QtGui.QImage]:
    if str(path).lower().endswith(".svg"):
        renderer = QtSvg.QSvgRenderer(QtCore.QByteArray(data))
        if not renderer.isValid():
            return None
        size = renderer.defaultSize()
        image = QtGui.QImage(
            max(1, size.width()),
            max(1, size.height()),
            QtGui.QImage.Format.Format_ARGB32_Premultiplied,
        )
        image.fill(0)
        painter = QtGui.QPainter(image)
        try:
            renderer.render(painter)
        finally:
            painter.end()
        return image
    return QtGui.QImage.fromData(data)
