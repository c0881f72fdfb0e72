"""Test utilities for wren pipelines::

    from wren.testing import RecordingDispatcher
"""

from wren.testing.dispatcher import Binding, DispatchResult, RecordingDispatcher

__all__ = ["Binding", "DispatchResult", "RecordingDispatcher"]
