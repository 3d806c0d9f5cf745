#!/usr/bin/env python3
"""
Example usage of the JSON Reformatter.

This script demonstrates expanding, compacting and repairing a JSON
fragment that sits inside a larger piece of source text.
"""

from json_reformatter import JSONReformatter, FormatMode, ParseFailure


def main():
    """Main example function."""
    print("JSON Reformatter Example")
    print("=" * 50)

    document = (
        'settings = {"users": {"alice": {"age": 30, "tags": ["admin", "ops"]}}, '
        '"limits": [10, 20]}\n'
    )
    print(f"Original document:\n{document}")

    reformatter = JSONReformatter()

    # Full expansion of the fragment the offset falls inside
    offset = document.index('"users"')
    result = reformatter.reformat_at(document, offset, FormatMode.FULL)
    print(f"Fully expanded (column {result.column}):")
    print(result.apply(document))

    # One level only
    result = reformatter.reformat_at(document, offset, FormatMode.COMPACT)
    print("Compact:")
    print(result.apply(document))

    # Two levels
    result = reformatter.reformat_at(document, offset, FormatMode.DEPTH, depth=2)
    print("Depth 2:")
    print(result.apply(document))

    # Repair a malformed fragment before formatting
    malformed = "payload = { name: 'Bob', STATUS: 'A C T I V E', meta: \"\"{\"x\": 1}\"\" }\n"
    print(f"Malformed document:\n{malformed}")
    try:
        result = reformatter.reformat_at(malformed, None, FormatMode.CLEANUP)
        print("✅ Cleaned up:")
        print(result.apply(malformed))
        print(f"   Repaired text: {result.repaired_text}")
    except ParseFailure as e:
        print(f"❌ Cleanup failed: {e}")
        print(f"   Text that failed to parse: {e.text}")

    summary = reformatter.profiler.get_performance_summary()
    print(f"\nOperations run: {summary['total_operations']}")


if __name__ == "__main__":
    main()
