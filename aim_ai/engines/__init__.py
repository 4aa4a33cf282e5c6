from aim_ai.engines.gemini_engine import GeminiEngine, OfflineTutorEngine, build_tutor_engine

__all__ = ["GeminiEngine", "OfflineTutorEngine", "build_tutor_engine"]
