"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Server
PORT: int = int(os.getenv("PORT", "3001").strip() or "3001")

# CORS (comma-separated origins; "*" allows any)
CORS_ALLOW_ORIGINS: list[str] = [
    o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()
] or ["*"]

# DeepSeek (OpenAI-compatible chat completions)
DEEPSEEK_API_KEY: str = os.getenv("DEEPSEEK_API_KEY", "").strip()
DEEPSEEK_BASE_URL: str = (
    os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com").strip() or "https://api.deepseek.com"
)
DEEPSEEK_MODEL: str = os.getenv("DEEPSEEK_MODEL", "deepseek-chat").strip() or "deepseek-chat"

# Model call limits (timeout in seconds)
LLM_TEMPERATURE: float = 0
LLM_MAX_TOKENS: int = 1000
LLM_TIMEOUT: float = 30.0

# Tavily web search
TAVILY_API_KEY: str = os.getenv("TAVILY_API_KEY", "").strip()
TAVILY_SEARCH_URL: str = "https://api.tavily.com/search"
SEARCH_MAX_RESULTS: int = 1
TOOLS_HTTP_TIMEOUT: float = 15.0

# Keys containing this marker are treated as unconfigured (e.g. "your_deepseek_key")
CREDENTIAL_PLACEHOLDER_MARKER: str = "your_"

# Conversation threads
DEFAULT_THREAD_ID: str = "default"
# Idle threads older than this are dropped from memory; 0 disables expiry
THREAD_TTL_SECONDS: float = float(os.getenv("THREAD_TTL_SECONDS", "0").strip() or "0")

# Delays (seconds)
FALLBACK_DELAY: float = 1.0
CONSOLE_LINE_DELAY: float = 0.05

# Browser client
API_BASE: str = os.getenv("API_BASE", f"http://localhost:{PORT}").strip()
