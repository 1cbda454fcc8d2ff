# 🎵 songbot/infrastructure/music/__init__.py
"""🎵 Музичний пайплайн: пошук, сесії, доставка, хмара."""

from .audio_downloader import AudioDownloader
from .cloud_uploader import CloudUploader
from .delivery_orchestrator import DeliveryOrchestrator
from .file_watcher import FileReadinessWatcher
from .personal_library import PersonalLibrary
from .search_service import SongSearchService
from .session_store import SessionStore
from .share_card import parse_share_card, parse_track_file_name

__all__ = [
    "AudioDownloader",
    "CloudUploader",
    "DeliveryOrchestrator",
    "FileReadinessWatcher",
    "PersonalLibrary",
    "SongSearchService",
    "SessionStore",
    "parse_share_card",
    "parse_track_file_name",
]
