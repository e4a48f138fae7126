import asyncio
import logging
from typing import Callable, List, Optional, Set

from ..services.errors import CapabilityUnavailable
from ..services.topic_catalog import find_topic
from .capabilities import (
    Blob,
    Downloader,
    MediaDevices,
    MediaRecorder,
    MediaStream,
    RelayClient,
    SessionState,
    SpeechRecognizer,
    SpeechResultEvent,
)

IDLE_PROMPT = "Click start to begin your session"
START_PROMPT = "Start speaking to receive AI prompts."
UNSUPPORTED_PROMPT = "Speech recognition not supported in this browser."
STOPPED_PROMPT = "Recording stopped. Review your performance!"

RECORDING_TYPE = "video/webm"
RECORDING_FILENAME = "recording.webm"


class SessionController:
    """Recording/transcription lifecycle for one topic.

    Idle -> Recording on start(), Recording -> Idle on stop(). Every
    finalized speech result is sent to the prompt relay as its own request;
    the reply replaces the displayed prompt unless a newer reply was already
    shown or the recording it belongs to has ended.
    """

    def __init__(
        self,
        topic_id: str,
        media_devices: MediaDevices,
        recorder_factory: Callable[[MediaStream], MediaRecorder],
        recognizer_factory: Optional[Callable[[], SpeechRecognizer]],
        relay: RelayClient,
        downloader: Downloader,
        on_change: Optional[Callable[[SessionState], None]] = None,
    ):
        self.topic_id = topic_id
        self.topic = find_topic(topic_id)
        self.media_devices = media_devices
        self.recorder_factory = recorder_factory
        # None, or raising CapabilityUnavailable, when the host has no speech recognition.
        self.recognizer_factory = recognizer_factory
        self.relay = relay
        self.downloader = downloader
        self.on_change = on_change
        self.state = SessionState(prompt=IDLE_PROMPT)
        self.stream: Optional[MediaStream] = None
        self.recorder: Optional[MediaRecorder] = None
        self.recognizer: Optional[SpeechRecognizer] = None
        self.logger = logging.getLogger("coach")
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._pending: Set[asyncio.Task] = set()
        self._generation = 0
        self._seq = 0
        self._applied_seq = 0

    @property
    def title(self) -> str:
        return f"{self.topic.name} Session" if self.topic else ""

    @property
    def button_label(self) -> str:
        return "Stop Recording" if self.state.recording else "Start Recording"

    def _changed(self) -> None:
        if self.on_change:
            self.on_change(self.state)

    async def mount(self) -> None:
        self._loop = asyncio.get_running_loop()
        try:
            self.stream = await self.media_devices.get_user_media(video=True, audio=True)
        except Exception as e:
            self.logger.error("session.media.failed topic=%s err=%s", self.topic_id, e)
            self.stream = None
            return
        self.logger.info("session.media.ready topic=%s", self.topic_id)

    def start(self) -> None:
        if self.stream is None or self.state.recording:
            return
        self._generation += 1
        self._applied_seq = self._seq

        recorder = self.recorder_factory(self.stream)
        recorder.on_data = lambda chunk: self._on_data(recorder, chunk)
        self.recorder = recorder
        self.state.chunks = []
        recorder.start()

        self.state.recording = True
        self.state.transcript = ""
        self.state.prompt = START_PROMPT
        self.logger.info("session.start topic=%s generation=%d", self.topic_id, self._generation)

        try:
            self.recognizer = self._start_recognizer()
        except CapabilityUnavailable:
            self.logger.warning("session.recognition.unavailable topic=%s", self.topic_id)
            self.state.prompt = UNSUPPORTED_PROMPT
        self._changed()

    def _start_recognizer(self) -> SpeechRecognizer:
        if self.recognizer_factory is None:
            raise CapabilityUnavailable()
        recognizer = self.recognizer_factory()
        recognizer.continuous = True
        recognizer.interim_results = False
        recognizer.on_result = self._on_result
        recognizer.start()
        return recognizer

    def _stop_device(self, name: str, device) -> None:
        if device is None:
            return
        try:
            device.stop()
        except Exception as e:
            self.logger.warning("session.%s.stop_failed topic=%s err=%s", name, self.topic_id, e)

    def _release(self) -> List[bytes]:
        # Recorder first: a flush it delivers while stopping still counts.
        self._stop_device("recorder", self.recorder)
        self._stop_device("recognizer", self.recognizer)
        self.recorder = None
        self.recognizer = None
        self._generation += 1
        self.state.recording = False
        chunks, self.state.chunks = self.state.chunks, []
        return chunks

    def stop(self) -> None:
        chunks = self._release()
        self.state.prompt = STOPPED_PROMPT
        if chunks:
            blob = Blob(parts=tuple(chunks), type=RECORDING_TYPE)
            url = self.downloader.create_object_url(blob)
            try:
                self.downloader.download(url, RECORDING_FILENAME)
            finally:
                self.downloader.revoke_object_url(url)
        self.logger.info("session.stop topic=%s chunks=%d", self.topic_id, len(chunks))
        self._changed()

    def toggle(self) -> None:
        if self.state.recording:
            self.stop()
        else:
            self.start()

    def teardown(self) -> None:
        # Unmount drops an unfinished recording rather than downloading it.
        try:
            if self.state.recording:
                self._release()
        finally:
            if self.stream is not None:
                for track in self.stream.get_tracks():
                    self._stop_device("track", track)
            self.stream = None
        self.logger.info("session.teardown topic=%s", self.topic_id)

    def _on_data(self, recorder: MediaRecorder, chunk: bytes) -> None:
        # Data from a recorder that is no longer current belongs to no recording.
        if recorder is self.recorder and len(chunk) > 0:
            self.state.chunks.append(chunk)

    def _on_result(self, event: SpeechResultEvent) -> None:
        for i in range(event.result_index, len(event.results)):
            result = event.results[i]
            if not result.is_final:
                continue
            transcript = result[0].transcript
            self.state.transcript += transcript
            self._seq += 1
            self._send(transcript, self._seq, self._generation)
        self._changed()

    def _send(self, transcript: str, seq: int, generation: int) -> None:
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self._request_prompt(transcript, seq, generation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _request_prompt(self, transcript: str, seq: int, generation: int) -> None:
        try:
            data = await self.relay.generate_prompt(transcript, self.topic_id)
        except Exception as e:
            self.logger.error("session.prompt.fetch_failed topic=%s err=%s", self.topic_id, e)
            return
        prompt = data.get("prompt") if isinstance(data, dict) else None
        if not prompt:
            return
        if generation != self._generation or seq <= self._applied_seq:
            self.logger.info("session.prompt.stale seq=%d applied=%d", seq, self._applied_seq)
            return
        self._applied_seq = seq
        self.state.prompt = prompt
        self._changed()

    async def drain(self) -> None:
        """Wait for every in-flight relay request to settle."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
