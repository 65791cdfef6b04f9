# Line key constants
WELCOME = "WELCOME"                  # app start
CAMERA_ACTIVE = "CAMERA_ACTIVE"      # first tap, stream granted
CAMERA_FAILED = "CAMERA_FAILED"      # first tap, stream denied / no device
ANALYZING = "ANALYZING"              # second tap, request going out
ANALYSIS_FAILED = "ANALYSIS_FAILED"  # request failed for any reason
NO_RESULT = "NO_RESULT"              # read-again with nothing to read

LINE_TEXT: dict[str, str] = {
    WELCOME: "Welcome to Vision Assistant. Tap anywhere on the screen to capture and analyze your surroundings.",
    CAMERA_ACTIVE: "Camera is now active. Please point your camera at what you want to analyze.",
    CAMERA_FAILED: "Could not access the camera. Please make sure you've granted camera permissions.",
    ANALYZING: "Analyzing your surroundings. Please wait a moment.",
    ANALYSIS_FAILED: "Sorry, there was an error analyzing the image. Please try again.",
    NO_RESULT: "There is nothing to read yet. Tap anywhere to capture.",
}

# Pre-recorded file for each line key (placed under assets/<filename>)
LINE_AUDIO: dict[str, str] = {
    WELCOME: "welcome.mp3",
    CAMERA_ACTIVE: "camera_active.mp3",
    CAMERA_FAILED: "camera_failed.mp3",
    ANALYZING: "analyzing.mp3",
    ANALYSIS_FAILED: "analysis_failed.mp3",
    NO_RESULT: "no_result.mp3",
}
