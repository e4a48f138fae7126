import asyncio

import pytest

from coach.services.errors import PermissionDenied
from coach.session.capabilities import (
    Downloader,
    MediaDevices,
    MediaRecorder,
    MediaStream,
    MediaTrack,
    RelayClient,
    SpeechAlternative,
    SpeechRecognizer,
    SpeechResult,
    SpeechResultEvent,
)
from coach.session.controller import SessionController


class FakeTrack(MediaTrack):
    def __init__(self, kind):
        self.kind = kind
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakeStream(MediaStream):
    def __init__(self):
        self.tracks = [FakeTrack("video"), FakeTrack("audio")]

    def get_tracks(self):
        return list(self.tracks)


class FakeMediaDevices(MediaDevices):
    def __init__(self, deny=False):
        self.deny = deny
        self.calls = []
        self.stream = FakeStream()

    async def get_user_media(self, video=True, audio=True):
        self.calls.append((video, audio))
        if self.deny:
            raise PermissionDenied()
        return self.stream


class FakeRecorder(MediaRecorder):
    def __init__(self, stream, final_chunk=b"", stop_error=None):
        self.stream = stream
        self.final_chunk = final_chunk
        self.stop_error = stop_error
        self.started = False
        self.stopped = False

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True
        if self.stop_error:
            raise self.stop_error
        # Recorders flush what they still buffer when stopped.
        if self.final_chunk and self.on_data:
            self.on_data(self.final_chunk)

    def emit(self, chunk):
        self.on_data(chunk)


class FakeRecognizer(SpeechRecognizer):
    def __init__(self):
        self.started = False
        self.stopped = False

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def emit(self, *results, result_index=0):
        event = SpeechResultEvent(
            results=[SpeechResult([SpeechAlternative(text)], is_final=final) for text, final in results],
            result_index=result_index,
        )
        self.on_result(event)


class FakeDownloader(Downloader):
    def __init__(self):
        self.created = {}
        self.downloads = []
        self.revoked = []

    def create_object_url(self, blob):
        url = f"blob:{len(self.created)}"
        self.created[url] = blob
        return url

    def download(self, url, filename):
        self.downloads.append((self.created[url], filename))

    def revoke_object_url(self, url):
        self.revoked.append(url)


class FakeRelay(RelayClient):
    """Answers with `prompt: reply to <text>`, or waits on a future per call when `manual`."""

    def __init__(self, manual=False, fail=False):
        self.manual = manual
        self.fail = fail
        self.calls = []
        self.futures = []

    async def generate_prompt(self, transcription, topic):
        self.calls.append((transcription, topic))
        if self.fail:
            raise ConnectionError("relay down")
        if self.manual:
            fut = asyncio.get_running_loop().create_future()
            self.futures.append(fut)
            return await fut
        return {"prompt": f"reply to {transcription}"}


class Harness:
    def __init__(self, speech=True, deny=False, relay=None, final_chunk=b"", stop_error=None):
        self.devices = FakeMediaDevices(deny=deny)
        self.relay = relay or FakeRelay()
        self.downloader = FakeDownloader()
        self.recorders = []
        self.recognizers = []
        self.changes = []
        self.stop_error = stop_error
        self.final_chunk = final_chunk
        self.controller = SessionController(
            "job-interview",
            self.devices,
            self._make_recorder,
            self._make_recognizer if speech else None,
            self.relay,
            self.downloader,
            on_change=lambda state: self.changes.append(state.prompt),
        )

    def _make_recorder(self, stream):
        rec = FakeRecorder(stream, final_chunk=self.final_chunk, stop_error=self.stop_error)
        self.recorders.append(rec)
        return rec

    def _make_recognizer(self):
        rec = FakeRecognizer()
        self.recognizers.append(rec)
        return rec

    @property
    def recorder(self):
        return self.recorders[-1]

    @property
    def recognizer(self):
        return self.recognizers[-1]


@pytest.fixture
def harness():
    return Harness
