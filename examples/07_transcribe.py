"""07 - Transcribe and translate an audio file.

Usage: python 07_transcribe.py speech.mp3
"""

import sys

from aionic import AudioClient, AudioResponseFormat

client = AudioClient()
print("Transcription:", client.set_language("en").transcribe(sys.argv[1]).text)

subtitles = client.set_response_format(AudioResponseFormat.SRT).translate(sys.argv[1])
print("Translation (srt):")
print(subtitles.text)
