# Dot IVR Analyzer
# Claude calls for channel extraction and IVR log diagnosis

from dataclasses import dataclass

from anthropic import Anthropic
import httpx

from .config import (
    ANTHROPIC_API_KEY,
    ANTHROPIC_MODEL,
    ANTHROPIC_TIMEOUT,
    EXTRACT_MAX_TOKENS,
    ANALYSIS_MAX_TOKENS
)
from .helpers import strip_model_text, is_channel_number
from .log_filter import extract_channel_history

UNKNOWN_CHANNEL = 'UNKNOWN'


@dataclass
class AnalysisResult:
    channel_number: str
    filtered_log: str
    analysis: str


def build_anthropic_client(api_key=ANTHROPIC_API_KEY, timeout=ANTHROPIC_TIMEOUT):
    """Create the Anthropic client used by the analyzer"""
    return Anthropic(
        api_key=api_key,
        http_client=httpx.Client(timeout=timeout, follow_redirects=True)
    )


class IvrLogAnalyzer:
    """Runs the two-step Claude workflow for one IVR incident email.
    
    The client is passed in so the service (and tests) decide how it is
    built. Prompts are str.format templates with the fields
    {mail_content}, {filtered_log} and {channel_number}.
    """

    def __init__(self, client, extract_prompt, analysis_prompt,
                 model=ANTHROPIC_MODEL, max_tokens=ANALYSIS_MAX_TOKENS):
        self.client = client
        self.extract_prompt = extract_prompt
        self.analysis_prompt = analysis_prompt
        self.model = model
        self.max_tokens = max_tokens

    def _ask(self, content, max_tokens, temperature):
        response = self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[
                {'role': 'user', 'content': content}
            ]
        )
        return response.content[0].text

    def extract_channel_number(self, mail_content):
        """Ask Claude for the channel number in the email.
        
        Returns the digits as written, or UNKNOWN (or whatever Claude
        answered) when no number was found. Callers check the value with
        is_channel_number before trusting it.
        """
        prompt = self.extract_prompt.format(mail_content=mail_content)
        answer = self._ask(prompt, max_tokens=EXTRACT_MAX_TOKENS, temperature=0)
        return strip_model_text(answer)

    def filter_log(self, log_text, channel_number):
        """Channel history for a valid number, otherwise the raw log"""
        if channel_number != UNKNOWN_CHANNEL and is_channel_number(channel_number):
            return extract_channel_history(log_text, channel_number)
        return log_text

    def analyze(self, mail_content, image, log_text):
        """Diagnose an IVR incident from the email, screenshot and log.
        
        Args:
            mail_content: Email body describing the incident
            image: ImagePayload of the call log screenshot
            log_text: Raw IVR trace text
        
        Returns:
            AnalysisResult with the channel, the log sent to Claude and
            Claude's analysis
        """
        channel_number = self.extract_channel_number(mail_content)
        print(f"Extracted channel number: {channel_number}")
        
        filtered_log = self.filter_log(log_text, channel_number)
        
        prompt = self.analysis_prompt.format(
            mail_content=mail_content,
            filtered_log=filtered_log,
            channel_number=channel_number
        )
        analysis = self._ask(
            [
                {'type': 'text', 'text': prompt},
                image.to_content_block()
            ],
            max_tokens=self.max_tokens,
            temperature=0.2
        )
        
        return AnalysisResult(
            channel_number=channel_number,
            filtered_log=filtered_log,
            analysis=analysis
        )
