# ABOUTME: Shared pytest fixtures for daisykit tests.
# ABOUTME: Exposes the sample DAISY documents from tests.fixtures as string fixtures.

import pytest

from tests.fixtures.daisy_documents import SAMPLE_DTBOOK, SAMPLE_NCX, SAMPLE_OPF, SAMPLE_SMIL


@pytest.fixture
def sample_opf() -> str:
    """OPF package with split dc-metadata/x-metadata sections."""
    return SAMPLE_OPF


@pytest.fixture
def sample_ncx() -> str:
    """NCX with three levels of nested navPoints and a pageList."""
    return SAMPLE_NCX


@pytest.fixture
def sample_smil() -> str:
    """SMIL with two complete pars and three pars that must be skipped."""
    return SAMPLE_SMIL


@pytest.fixture
def sample_dtbook() -> str:
    """DTBook with a DOCTYPE, head metas and a short level1."""
    return SAMPLE_DTBOOK
