"""
Command line entry point

    patient-extract report.txt
    patient-extract --no-ner --format json report.txt
    patient-extract                     # runs the embedded demo report
"""
import argparse
import json
import sys
from typing import List, Optional

from config import KNOWN_NER_BACKENDS
from metrics import get_metrics
from patient_extractor import PatientInformationExtractor

DEMO_DOCUMENT = """\
Medical Report
===============
Patient: Dr. Emily Johnson
Date of Birth: March 15, 1978
Claim Number: MED2024001234

Patient Mr. Robert Smith (DOB: 12/05/1965) visited for consultation.
Claim ID: ABC987654321

Additional Information:
- Patient Name: Maria Garcia
- Born: January 8, 1990
- Medical ID: XYZ123456789
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="patient-extract",
        description="Extract patient names, dates of birth and claim IDs from a medical report."
    )
    parser.add_argument("path", nargs="?",
                        help="Text file to process (default: built-in demo report)")
    parser.add_argument("--backend", action="append", choices=KNOWN_NER_BACKENDS,
                        help="NER backend to try, in order; repeatable")
    parser.add_argument("--no-ner", action="store_true",
                        help="Skip NER and use cue patterns for names")
    parser.add_argument("--format", choices=("text", "json"), default="text",
                        help="Output format")
    parser.add_argument("--metrics", action="store_true",
                        help="Print Prometheus metrics to stderr after the report")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    extractor = PatientInformationExtractor(
        use_ner=False if args.no_ner else None,
        backends=args.backend
    )

    if args.path:
        result = extractor.extract_from_file(args.path)
    else:
        result = extractor.extract(DEMO_DOCUMENT)

    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.render())

    if args.metrics:
        sys.stderr.write(get_metrics())
    return 0


if __name__ == "__main__":
    sys.exit(main())
