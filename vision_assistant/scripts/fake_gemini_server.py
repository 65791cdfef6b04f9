"""
Fake Gemini server for running the proxy without a real API key.

Answers POST /v1/models/{model}:generateContent like the real endpoint.
The reply depends on the x-goog-api-key header:
  "bad-key"  -> 400 with a Gemini-style error body
  "empty"    -> 200 with no candidates (proxy falls back)
  anything   -> 200 with a canned description

Usage:
    python -m vision_assistant.scripts.fake_gemini_server   (terminal 1)
    GEMINI_API_BASE=http://127.0.0.1:9100/v1 GEMINI_API_KEY=dev \
        python -m vision_assistant serve                     (terminal 2)
"""

import time
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

app = FastAPI(title="fake-gemini-server")

CANNED = (
    "A person stands near a doorway about two meters ahead. "
    "To the left is a table with a laptop on it. The floor in front of you is clear."
)


@app.post("/v1/models/{model_action}")
async def generate_content(model_action: str, request: Request):
    key = request.headers.get("x-goog-api-key", "")
    body = await request.json()
    parts = body["contents"][0]["parts"]
    image_len = len(parts[1]["inline_data"]["data"])
    print(f"[gemini] {model_action} key={key[:4]}... image={image_len} b64 chars")
    time.sleep(0.3)

    if key == "bad-key":
        return JSONResponse(
            {"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}},
            status_code=400,
        )
    if key == "empty":
        return {"candidates": [], "promptFeedback": {"blockReason": "OTHER"}}
    return {
        "candidates": [
            {"content": {"parts": [{"text": CANNED}], "role": "model"}, "finishReason": "STOP"}
        ]
    }


if __name__ == "__main__":
    print("Fake Gemini server starting on http://localhost:9100")
    uvicorn.run(app, host="0.0.0.0", port=9100)
