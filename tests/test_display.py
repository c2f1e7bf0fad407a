"""
Tests for frame sinks.
"""

import cv2
import numpy as np
import pytest
from unittest.mock import patch

from display.base import NullSink
from display.window import WindowSink
from models.errors import ProcessingError


class TestNullSink:
    def test_counts_frames_and_never_quits(self):
        sink = NullSink()
        sink.show(np.zeros((4, 4, 3), dtype=np.uint8))
        sink.show(np.zeros((4, 4, 3), dtype=np.uint8))
        
        assert sink.frames_shown == 2
        assert sink.should_quit() is False
        sink.close()


class TestWindowSink:
    def test_window_created_once_and_frame_shown(self):
        frame = np.zeros((4, 4, 3), dtype=np.uint8)
        with patch("display.window.cv2") as cv2:
            sink = WindowSink("Camera Feed")
            sink.show(frame)
            sink.show(frame)
        
        cv2.namedWindow.assert_called_once_with("Camera Feed", cv2.WINDOW_AUTOSIZE)
        assert cv2.imshow.call_count == 2

    def test_quit_key(self):
        with patch("display.window.cv2") as cv2:
            sink = WindowSink(quit_key="q")
            cv2.waitKey.return_value = ord("q")
            assert sink.should_quit() is True
            
            cv2.waitKey.return_value = -1
            assert sink.should_quit() is False
            
            cv2.waitKey.return_value = ord("x")
            assert sink.should_quit() is False

    def test_close_destroys_only_opened_window(self):
        with patch("display.window.cv2") as cv2:
            sink = WindowSink("w")
            sink.close()
            cv2.destroyWindow.assert_not_called()
            
            sink.show(np.zeros((4, 4, 3), dtype=np.uint8))
            sink.close()
            cv2.destroyWindow.assert_called_once_with("w")

    def test_quit_key_must_be_single_character(self):
        with pytest.raises(ValueError):
            WindowSink(quit_key="esc")

    def test_highgui_errors_become_processing_error(self):
        frame = np.zeros((4, 4, 3), dtype=np.uint8)
        gui_missing = cv2.error("The function is not implemented. Rebuild the library with GTK+")
        with patch("display.window.cv2") as mock_cv2:
            mock_cv2.namedWindow.side_effect = gui_missing
            mock_cv2.waitKey.side_effect = gui_missing
            sink = WindowSink()
            
            with pytest.raises(ProcessingError, match="imshow"):
                sink.show(frame)
            with pytest.raises(ProcessingError, match="waitKey"):
                sink.should_quit()
