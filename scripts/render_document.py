"""Fill a template from the document API and export the result.

Usage:
    python -m scripts.render_document 1 landlordName="Acme Rentals" rentAmount=1200 --text lease.txt
    python -m scripts.render_document 2 senderName=Jane --print
    python -m scripts.render_document 3 employerName=Acme --save --user-id 7
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.clients import LegalDocsClient
from app.core.config import get_settings
from app.core.errors import ApiError, ExportError
from app.core.factory import ComponentFactory


def parse_values(pairs: list[str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep:
            raise SystemExit(f"Expected name=value, got {pair!r}")
        values[name.strip()] = value
    return values


async def main(args: argparse.Namespace) -> int:
    settings = get_settings()
    factory = ComponentFactory(settings)
    resolver = factory.get_resolver()
    exporter = factory.get_exporter()
    values = parse_values(args.values)

    async with LegalDocsClient.from_settings(settings, resolver=resolver) as client:
        try:
            template = await client.get_template(args.template_id)
            report = resolver.resolve_with_report(
                template.template_content,
                values,
                template.id,
                fields=template.fields,
            )
            if args.save:
                saved = await client.save_document(
                    args.user_id, template.id, template.title, report.content, values
                )
                print(f"Saved document {saved.get('id')}")
        except ApiError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    print(f"{report.total_replacements} replacements in {template.title!r}")
    if report.unresolved:
        print(f"Unresolved markers: {', '.join(report.unresolved)}")

    try:
        if args.text:
            path = await exporter.to_plain_text(report.content, args.text)
            print(f"Wrote {path}")
        if args.print:
            await exporter.to_print_dialog(report.content, template.title)
            await exporter.wait_for_teardowns()
        if not (args.text or args.print):
            print(report.content)
    except ExportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fill a template and export it")
    parser.add_argument("template_id", type=int)
    parser.add_argument("values", nargs="*", help="Field values as name=value")
    parser.add_argument("--text", metavar="FILENAME", help="Write a .txt download")
    parser.add_argument("--print", action="store_true", help="Open the print dialog")
    parser.add_argument("--save", action="store_true", help="Persist the document through the API")
    parser.add_argument("--user-id", type=int, default=None)
    sys.exit(asyncio.run(main(parser.parse_args())))
