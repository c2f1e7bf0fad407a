"""
Pipeline engine for the motion monitor.

Runs the synchronous per-frame loop:
read -> normalize -> detect -> annotate -> show -> poll quit.
Frame N+1 is not read until frame N has been shown.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from detection.annotator import Annotator
from detection.motion import MotionDetector
from detection.preprocess import Preprocessor
from display.base import FrameSink, NullSink
from display.window import WindowSink
from models.config import Config, PipelineSettings
from models.detection import BoundingBox
from models.errors import DeviceUnavailable, MotionMonitorError
from models.frame import FrameData
from observation import ObservationSource, create_source_from_config


class RunOutcome(str, Enum):
    QUIT_REQUESTED = "quit_requested"
    END_OF_STREAM = "end_of_stream"
    MAX_FRAMES = "max_frames"
    DEVICE_UNAVAILABLE = "device_unavailable"
    PIPELINE_FAILED = "pipeline_failed"
    INTERRUPTED = "interrupted"


_OUTCOME_MESSAGES = {
    RunOutcome.QUIT_REQUESTED: "Quit requested",
    RunOutcome.END_OF_STREAM: "End of stream",
    RunOutcome.MAX_FRAMES: "Frame limit reached",
    RunOutcome.DEVICE_UNAVAILABLE: "Camera could not be opened",
    RunOutcome.PIPELINE_FAILED: "Frame pipeline failed",
    RunOutcome.INTERRUPTED: "Interrupted",
}


@dataclass
class PipelineStats:
    """Runtime statistics for the pipeline."""
    frame_count: int = 0
    motion_frame_count: int = 0
    box_count: int = 0
    start_time: float = field(default_factory=time.time)
    last_stats_log_time: float = field(default_factory=time.time)


@dataclass
class RunResult:
    """How a run ended."""
    outcome: RunOutcome
    stats: PipelineStats
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.outcome not in (RunOutcome.DEVICE_UNAVAILABLE, RunOutcome.PIPELINE_FAILED)

    @property
    def message(self) -> str:
        text = _OUTCOME_MESSAGES[self.outcome]
        if self.error is not None:
            text = f"{text}: {self.error}"
        return text


class PipelineEngine:
    """
    Main processing engine.
    
    The detector is owned by this engine; do not share it with another one.
    
    Example:
        source = OpenCVSource(OpenCVSourceConfig(device_id=0))
        engine = PipelineEngine(source, Preprocessor(), MotionDetector(), Annotator(), WindowSink())
        result = engine.run()
    """

    def __init__(
        self,
        source: ObservationSource,
        preprocessor: Preprocessor,
        detector: MotionDetector,
        annotator: Annotator,
        sink: FrameSink,
        config: Optional[PipelineSettings] = None,
    ):
        self.source = source
        self.preprocessor = preprocessor
        self.detector = detector
        self.annotator = annotator
        self.sink = sink
        self.config = config or PipelineSettings()
        self.stats = PipelineStats()
        self._running = False
        self._callbacks: List[Callable[[FrameData, List[BoundingBox]], None]] = []

    def add_callback(self, callback: Callable[[FrameData, List[BoundingBox]], None]) -> None:
        """
        Add a callback to be called after each frame is processed.
        
        Args:
            callback: Function taking (frame_data, boxes) as arguments.
        """
        self._callbacks.append(callback)

    def run(self) -> RunResult:
        """
        Run the processing loop until quit, end of stream or failure.
        
        The source and sink are released on every exit path.
        """
        self._running = True
        self.stats = PipelineStats()

        try:
            self.source.open()
        except DeviceUnavailable as e:
            self._cleanup()
            return self._finish(RunOutcome.DEVICE_UNAVAILABLE, e)

        logging.info(f"Pipeline started: source={self.source.source_id}")
        outcome = RunOutcome.END_OF_STREAM
        error: Optional[BaseException] = None
        try:
            while self._running:
                frame_data = self.source.read()
                if frame_data is None:
                    outcome = RunOutcome.END_OF_STREAM
                    break

                self.process_frame(frame_data)

                if self.sink.should_quit():
                    outcome = RunOutcome.QUIT_REQUESTED
                    break

                if self.config.max_frames is not None and self.stats.frame_count >= self.config.max_frames:
                    outcome = RunOutcome.MAX_FRAMES
                    break

                self._handle_periodic_tasks()
            else:
                outcome = RunOutcome.QUIT_REQUESTED
        except KeyboardInterrupt:
            outcome = RunOutcome.INTERRUPTED
        except MotionMonitorError as e:
            outcome = RunOutcome.PIPELINE_FAILED
            error = e
        except Exception as e:
            logging.exception(f"Unexpected pipeline error: {e}")
            outcome = RunOutcome.PIPELINE_FAILED
            error = e
        finally:
            self._cleanup()

        return self._finish(outcome, error)

    def stop(self) -> None:
        """Signal the pipeline to stop after the current frame."""
        self._running = False

    def process_frame(self, frame_data: FrameData) -> List[BoundingBox]:
        """
        Push one frame through normalize, detect, annotate and show.
        
        Returns the motion boxes found in this frame.
        """
        normalized = self.preprocessor.normalize(frame_data.frame)
        boxes = self.detector.detect(normalized)

        self.stats.frame_count += 1
        if boxes:
            self.stats.motion_frame_count += 1
            self.stats.box_count += len(boxes)
            logging.debug(f"[MOTION] frame={frame_data.frame_index} boxes={len(boxes)}")

        annotated = self.annotator.annotate(frame_data.frame, boxes)
        self.sink.show(annotated)

        for callback in self._callbacks:
            try:
                callback(frame_data, boxes)
            except Exception as e:
                logging.warning(f"Callback error: {e}")

        return boxes

    def _handle_periodic_tasks(self) -> None:
        now = time.time()
        if now - self.stats.last_stats_log_time >= self.config.stats_log_interval:
            self._log_stats()
            self.stats.last_stats_log_time = now

    def _log_stats(self) -> None:
        elapsed = max(time.time() - self.stats.start_time, 1e-6)
        logging.info(
            f"Pipeline stats: frames={self.stats.frame_count}, "
            f"motion_frames={self.stats.motion_frame_count}, "
            f"boxes={self.stats.box_count}, "
            f"fps={self.stats.frame_count / elapsed:.1f}"
        )

    def _finish(self, outcome: RunOutcome, error: Optional[BaseException] = None) -> RunResult:
        result = RunResult(outcome=outcome, stats=self.stats, error=error)
        if result.ok:
            logging.info(f"Pipeline finished: {result.message}")
        else:
            logging.error(f"Pipeline finished: {result.message}")
        return result

    def _cleanup(self) -> None:
        self._running = False

        try:
            self.source.close()
        except Exception as e:
            logging.warning(f"Error closing source: {e}")

        try:
            self.sink.close()
        except Exception as e:
            logging.warning(f"Error closing sink: {e}")

        self._log_stats()
        logging.info("Pipeline stopped")


def create_engine_from_config(
    config: Dict[str, Any],
    display: Optional[bool] = None,
    max_frames: Optional[int] = None,
) -> PipelineEngine:
    """
    Factory function to create a PipelineEngine from a merged config dict.
    
    Args:
        config: Full application config dict.
        display: Override display.enabled (None keeps the config value).
        max_frames: Override pipeline.max_frames (None keeps the config value).
    """
    cfg = Config.from_dict(config)

    source = create_source_from_config(cfg.camera.to_dict(), source_id="main-camera")
    preprocessor = Preprocessor(
        blur_kernel_size=cfg.motion.blur_kernel_size,
        blur_sigma=cfg.motion.blur_sigma,
    )
    detector = MotionDetector(cfg.motion)
    annotator = Annotator(
        color=tuple(cfg.display.box_color),
        thickness=cfg.display.box_thickness,
    )

    show_window = cfg.display.enabled if display is None else display
    sink: FrameSink
    if show_window:
        sink = WindowSink(cfg.display.window_name, cfg.display.quit_key)
    else:
        sink = NullSink()

    pipeline_config = PipelineSettings(
        stats_log_interval=cfg.pipeline.stats_log_interval,
        max_frames=max_frames if max_frames is not None else cfg.pipeline.max_frames,
    )
    return PipelineEngine(source, preprocessor, detector, annotator, sink, pipeline_config)
