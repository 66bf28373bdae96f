"""Exception hierarchy for the media core"""


class VidForgeError(Exception):
    """Base class for all media core errors"""


class InvalidInput(VidForgeError, ValueError):
    """Malformed buffer, effect spec, duration or request"""


class UnsupportedPlatform(VidForgeError):
    """No usable speech provider in this environment"""


class SynthesisError(VidForgeError):
    """Speech provider reported a failure while producing narration"""


class NarrationTimeout(SynthesisError):
    """Narration did not complete within the caller's timeout"""
