import os
import sys
from types import SimpleNamespace

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)
sys.path.insert(0, os.path.join(ROOT, 'ivr-log'))

from app import create_app, EXTRACT_PROMPT, ANALYSIS_PROMPT  # noqa: E402
from shared import IvrLogAnalyzer  # noqa: E402

# 1x1 transparent PNG
PNG_BASE64 = (
    'iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA'
    '60e6kgAAAABJRU5ErkJggg=='
)

SAMPLE_LOG = (
    '09:00:01.000 [1111] [INIT.dxml] Start session\n'
    '09:00:02.500 [2222] [OTHER.dxml] Start session\n'
    '09:00:03.250 [1111] [PLAY.dxml] 1111 End'
)


class FakeMessages:
    """Stands in for client.messages, replaying canned answers in order."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return SimpleNamespace(content=[SimpleNamespace(type='text', text=answer)])


class FakeClient:
    def __init__(self, answers):
        self.messages = FakeMessages(answers)


@pytest.fixture
def make_analyzer():
    def _make(*answers):
        return IvrLogAnalyzer(
            client=FakeClient(answers),
            extract_prompt=EXTRACT_PROMPT,
            analysis_prompt=ANALYSIS_PROMPT,
            model='test-model'
        )
    return _make


@pytest.fixture
def make_client(make_analyzer):
    """Flask test client wired to an analyzer with canned answers."""
    def _make(*answers):
        analyzer = make_analyzer(*answers)
        application = create_app(analyzer=analyzer)
        application.config['TESTING'] = True
        return application.test_client(), analyzer
    return _make
