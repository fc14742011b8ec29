"""Pydantic schemas for synthesized audio briefings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AudioResult(BaseModel):
    """Audio produced by one synthesis call, ready for a browser audio element."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    audio_base64: str
    audio_url: str
    content_type: str
    model: str
    voice: str
    generation_time_ms: int


class BriefingAudio(AudioResult):
    """A narrated briefing: the script plus the audio rendering of it."""

    script: str
    word_count: int
    estimated_duration: int


class VoiceOption(BaseModel):
    id: str
    name: str
    desc: str
