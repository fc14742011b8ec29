"""Process-wide container for the upstream AI clients."""

from __future__ import annotations

from dataclasses import dataclass

from attention_index.config import Settings
from attention_index.services.llm_client import GenerationClient
from attention_index.services.speech import SpeechSynthesizer
from attention_index.services.vibe import VibeAnalyzer


@dataclass
class AIServices:
    generator: GenerationClient
    synthesizer: SpeechSynthesizer
    vibe: VibeAnalyzer

    @classmethod
    def from_settings(cls, settings: Settings) -> AIServices:
        return cls(
            generator=GenerationClient.from_settings(settings),
            synthesizer=SpeechSynthesizer.from_settings(settings),
            vibe=VibeAnalyzer.from_settings(settings),
        )

    async def close(self) -> None:
        await self.generator.close()
        await self.synthesizer.close()
        await self.vibe.close()
