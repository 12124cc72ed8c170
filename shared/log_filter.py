# Dot IVR Log Filter
# Reduces a raw IVR trace to the call flow of a single channel

import re
from dataclasses import dataclass, field

CHANNEL_NOT_FOUND = '해당 채널 번호의 흐름을 찾을 수 없습니다.'

STATUS_START = '▶'
STATUS_END = '■'

TIMESTAMP_PATTERN = re.compile(r'\d{2}:\d{2}:\d{2}\.\d{3}', re.ASCII)
# Blocks never span a line terminator (\r, U+2028, U+2029 included)
BRACKET_PATTERN = re.compile(r'\[[^\n\r\u2028\u2029]*?\]')


@dataclass
class FilteredEntry:
    """One condensed line of a channel's history."""
    time: str = ''
    status: str = ''
    bracket_tokens: list = field(default_factory=list)

    def render(self):
        return f"{self.time} {self.status} {''.join(self.bracket_tokens)}\n"


def extract_timestamp(line):
    """Return the first HH:MM:SS.mmm in the line, or '' if there is none."""
    match = TIMESTAMP_PATTERN.search(line)
    return match.group(0) if match else ''


def extract_bracket_tokens(line):
    """Return every [...] block in the line, left to right, brackets included."""
    return BRACKET_PATTERN.findall(line)


def detect_status(line):
    """Start marker wins over End when a line has both."""
    if 'Start' in line:
        return STATUS_START
    if 'End' in line:
        return STATUS_END
    return ''


def filter_channel_entries(log_text, channel):
    """Build the FilteredEntry list for one channel.
    
    Args:
        log_text: Full IVR trace, one event per line
        channel: Channel number, matched as a plain substring
    
    Returns:
        List of FilteredEntry in original line order
    
    Raises:
        ValueError: If channel is empty
    """
    if not channel:
        raise ValueError('Channel number cannot be empty')
    
    entries = []
    for line in log_text.split('\n'):
        if channel not in line:
            continue
        
        tokens = extract_bracket_tokens(line)
        # Lines without any bracket block are noise
        if not tokens:
            continue
        
        entries.append(FilteredEntry(
            time=extract_timestamp(line),
            status=detect_status(line),
            # The channel block itself is redundant once the line matched
            bracket_tokens=[t for t in tokens if channel not in t]
        ))
    
    return entries


def extract_channel_history(log_text, channel):
    """Condense an IVR log to the lines of one channel.
    
    Each kept line becomes '<time> <status> <bracket blocks>', e.g.
    '09:00:01.000 ▶ [INIT.dxml]'. Returns CHANNEL_NOT_FOUND when no line
    of the log belongs to the channel.
    """
    entries = filter_channel_entries(log_text, channel)
    if not entries:
        return CHANNEL_NOT_FOUND
    return ''.join(entry.render() for entry in entries)
