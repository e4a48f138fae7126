"""Browser-platform collaborators used by the session controller.

Each class here is an interface: the controller only talks to these
methods, so a test (or a different host) can plug in its own
implementation. Value types mirror what the platform hands back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence


@dataclass(frozen=True)
class Blob:
    parts: Sequence[bytes]
    type: str = ""

    @property
    def size(self) -> int:
        return sum(len(p) for p in self.parts)

    def read(self) -> bytes:
        return b"".join(self.parts)


@dataclass(frozen=True)
class SpeechAlternative:
    transcript: str
    confidence: float = 1.0


@dataclass(frozen=True)
class SpeechResult:
    alternatives: Sequence[SpeechAlternative]
    is_final: bool = False

    def __getitem__(self, index: int) -> SpeechAlternative:
        return self.alternatives[index]

    def __len__(self) -> int:
        return len(self.alternatives)


@dataclass(frozen=True)
class SpeechResultEvent:
    results: Sequence[SpeechResult]
    result_index: int = 0


class MediaTrack(ABC):
    @abstractmethod
    def stop(self) -> None:
        ...


class MediaStream(ABC):
    @abstractmethod
    def get_tracks(self) -> List[MediaTrack]:
        ...


class MediaDevices(ABC):
    @abstractmethod
    async def get_user_media(self, video: bool = True, audio: bool = True) -> MediaStream:
        """Raise PermissionDenied (or any error) when access is refused."""


class MediaRecorder(ABC):
    # Called with each chunk the recorder emits.
    on_data: Optional[Callable[[bytes], None]] = None

    @abstractmethod
    def start(self) -> None:
        ...

    @abstractmethod
    def stop(self) -> None:
        ...


class SpeechRecognizer(ABC):
    continuous: bool = False
    interim_results: bool = True
    on_result: Optional[Callable[[SpeechResultEvent], None]] = None

    @abstractmethod
    def start(self) -> None:
        ...

    @abstractmethod
    def stop(self) -> None:
        ...


class Downloader(ABC):
    @abstractmethod
    def create_object_url(self, blob: Blob) -> str:
        ...

    @abstractmethod
    def download(self, url: str, filename: str) -> None:
        ...

    @abstractmethod
    def revoke_object_url(self, url: str) -> None:
        ...


class RelayClient(ABC):
    @abstractmethod
    async def generate_prompt(self, transcription: str, topic: str) -> dict:
        ...


@dataclass
class SessionState:
    recording: bool = False
    prompt: str = ""
    transcript: str = ""
    chunks: List[bytes] = field(default_factory=list)
