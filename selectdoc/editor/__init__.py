"""Editor host abstraction and its file and stream implementations."""

from .file_host import FileEditorHost, StreamEditorHost
from .host import EditorHost

__all__ = ["EditorHost", "FileEditorHost", "StreamEditorHost"]
