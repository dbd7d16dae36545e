"""All magic numbers and configuration constants."""

CHUNK_SIZE = 5000                   # maximum characters per chunk
SPEECH_RATE = 1.0                   # tempo multiplier, 1.0 = unchanged
ATEMPO_MIN = 0.5                    # ffmpeg atempo lower bound per filter instance
ATEMPO_MAX = 2.0                    # ffmpeg atempo upper bound per filter instance
OUTPUT_BITRATE = "192k"             # MP3 output bitrate
TTS_TIMEOUT_SECONDS = 60.0          # per synthesis call
TTS_RETRY_COUNT = 1                 # attempts per chunk, 1 = no retry
TTS_RETRY_BASE_DELAY = 1.0          # seconds, base delay for exponential backoff
STREAM_CHUNK_BYTES = 8192           # bytes read per iteration of the response stream
PROVIDERS = ("elevenlabs", "edge")
DEFAULT_PROVIDER = "elevenlabs"
ELEVENLABS_API_URL = "https://api.elevenlabs.io/v1/text-to-speech"
ELEVENLABS_VOICE_ID = "21m00Tcm4TlvDq8ikWAM"    # "Rachel", a stock ElevenLabs voice
EDGE_VOICE = "en-US-GuyNeural"
API_KEY_ENV = "ELEVENLABS_API_KEY"
VOICE_ID_ENV = "ELEVENLABS_VOICE_ID"
PROVIDER_ENV = "NARRATOR_PROVIDER"
CHUNK_DIR = "audio_chunks"
CHUNK_FILENAME = "chunk_{:04d}.mp3"
TEMPO_FILENAME = "chunk_{:04d}_tempo.mp3"
VERSION = "0.1.0"
