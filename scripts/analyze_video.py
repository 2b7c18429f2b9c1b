#!/usr/bin/env python3
"""
Run the video analysis for one application without going through HTTP.

Run from project root:
  python3 scripts/analyze_video.py <application_id> <video_path>

Overwrites video_transcript / video_analysis on the application row.
"""

import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from talent_screen.config import get_config
from talent_screen.services.video_analysis_service import VideoAnalysisService
from talent_screen.utils.exceptions import ServiceError
from talent_screen.utils.logger import setup_logging


def main():
    if len(sys.argv) < 3:
        print("Usage: python3 scripts/analyze_video.py <application_id> <video_path>")
        sys.exit(1)

    application_id, video_path = sys.argv[1], sys.argv[2]
    config = get_config()
    setup_logging(config)
    service = VideoAnalysisService(config)

    try:
        result = asyncio.run(service.analyze(application_id, video_path))
    except ServiceError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print(f"✅ Transcript ({len(result.transcript)} chars):")
    print(result.transcript)
    print("\nAnalysis:")
    print(result.analysis)


if __name__ == "__main__":
    main()
