"""
auditmatch.judgement — matcher, model base class and Z3 judgement engine.
"""
