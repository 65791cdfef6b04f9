"""
Pre-generate the fixed voice lines using edge-tts.

Usage:
    python -m vision_assistant.scripts.gen_tts

Output:
    vision_assistant/adapters/tts/assets/*.mp3

Voice used: en-US-JennyNeural (clear, neutral pace)
Alternative: en-US-GuyNeural
"""

import asyncio
import os
import edge_tts
from vision_assistant.adapters.tts.lines import LINE_TEXT, LINE_AUDIO
from vision_assistant.adapters.tts.narrator import ASSETS_DIR

VOICE = os.getenv("EDGE_TTS_VOICE", "en-US-JennyNeural")


async def generate_line(line_key: str, text: str, voice: str):
    os.makedirs(ASSETS_DIR, exist_ok=True)
    name = LINE_AUDIO.get(line_key, f"{line_key.lower()}.mp3")
    out_path = os.path.join(ASSETS_DIR, name)
    communicate = edge_tts.Communicate(text, voice)
    await communicate.save(out_path)
    print(f"  {line_key} -> {name}")


async def main():
    print(f"Generating voice lines ({VOICE})...")
    await asyncio.gather(*(generate_line(k, text, VOICE) for k, text in LINE_TEXT.items()))
    print("Done. Files saved to adapters/tts/assets/")


if __name__ == "__main__":
    asyncio.run(main())
