"""Unit tests for the caller-owned ProcessingState."""

import pytest

from pdfwhisper.contexts.analysis.exceptions import AnalysisInProgressError
from pdfwhisper.contexts.analysis.processing_state import ProcessingState


@pytest.mark.unit
def test_claim_sets_and_releases():
    state = ProcessingState()
    assert not state.is_processing

    with state.claim("outline") as claimed:
        assert claimed is state
        assert state.is_processing
        assert state.active_operation == "outline"

    assert not state.is_processing
    assert state.active_operation is None


@pytest.mark.unit
def test_second_claim_rejected():
    state = ProcessingState()

    with state.claim("persona"):
        with pytest.raises(AnalysisInProgressError) as exc_info:
            with state.claim("outline"):
                pass

    assert exc_info.value.active_operation == "persona"
    assert not state.is_processing


@pytest.mark.unit
def test_claim_released_on_error():
    state = ProcessingState()

    with pytest.raises(RuntimeError):
        with state.claim("outline"):
            raise RuntimeError("decoder exploded")

    assert not state.is_processing
    with state.claim("persona"):
        assert state.active_operation == "persona"
