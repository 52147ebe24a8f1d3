from pathlib import Path
from typing import Optional, Union

import azure.cognitiveservices.speech as speechsdk
from loguru import logger

from storefront_qa.app.core.config import SpeechConfig, get_settings


class SpeechSynthesisError(Exception):
    pass


class SpeechNotConfiguredError(SpeechSynthesisError):
    pass


class AzureSpeechSynthesizer:
    """Text-to-speech through Azure Cognitive Services, one wav file per call."""

    def __init__(self, config: Optional[SpeechConfig] = None):
        self.config = config or get_settings().speech
        if not self.config.is_configured:
            raise SpeechNotConfiguredError(
                "SPEECH_KEY is not configured. Set SPEECH_KEY and SPEECH_REGION to enable narration."
            )
        self._speech_config = speechsdk.SpeechConfig(
            subscription=self.config.key,
            region=self.config.region or "",
        )
        self._speech_config.speech_synthesis_voice_name = self.config.voice

    def synthesize(self, text: str, output_path: Union[str, Path]) -> Path:
        output_path = Path(output_path)
        logger.info(f'Generating narration: "{text[:50]}..."')
        audio_config = speechsdk.audio.AudioOutputConfig(filename=str(output_path))
        synthesizer = speechsdk.SpeechSynthesizer(
            speech_config=self._speech_config, audio_config=audio_config
        )
        result = synthesizer.speak_text_async(text).get()

        if result.reason == speechsdk.ResultReason.SynthesizingAudioCompleted:
            logger.info(f"Narration saved to: {output_path}")
            return output_path

        details = getattr(result, "cancellation_details", None)
        error_details = getattr(details, "error_details", None) or str(result.reason)
        raise SpeechSynthesisError(f"Speech synthesis failed: {error_details}")
