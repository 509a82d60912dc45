import argparse
import json
from pathlib import Path

from .env import Settings, get_settings, load_env

from . import __version__
from .database import get_session_factory, init_database
from .errors import PipelineError
from .logger import get_logger
from .models import JobRequirement, RawDocument
from .parser import guess_content_type, parse_document
from .retry import RetryError
from .schema import validate_opening
from pipelines.matching.features import extract_features
from pipelines.matching.orchestrator import ResumePipeline, submit_with_retry
from pipelines.matching.scoring import score_candidate
from storage.repositories.openings import OpeningRepository
from storage.repositories.profiles import ProfileRepository


def _repositories(settings: Settings):
    if not settings.db_path.exists():
        raise SystemExit(f"Database not found: {settings.db_path} (run `resumescore init-db` first)")
    session_factory = get_session_factory(settings.db_path)
    return OpeningRepository(session_factory), ProfileRepository(session_factory)


def _read_file(path_arg: str) -> Path:
    path = Path(path_arg)
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    return path


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_init_db(args: argparse.Namespace, settings: Settings) -> None:
    init_database(settings.db_path)
    print(f"Database ready: {settings.db_path}")


def cmd_add_opening(args: argparse.Namespace, settings: Settings) -> None:
    with _read_file(args.input).open("r", encoding="utf-8") as f:
        data = json.load(f)

    errors = validate_opening(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)

    openings, _profiles = _repositories(settings)
    opening = openings.create_opening(
        tenant_id=data["tenant_id"],
        title=data["title"],
        required_skills=data.get("required_skills", []),
        required_experience=data.get("required_experience", 0),
        location=data.get("location") or "",
        department=data.get("department") or "",
        description=data.get("description"),
        opening_id=data["id"],
        status=data.get("status") or "OPEN",
    )
    print(f"Opening: {opening.id}")


def cmd_list_openings(args: argparse.Namespace, settings: Settings) -> None:
    openings, _profiles = _repositories(settings)
    rows = openings.list_openings(args.tenant)
    if not rows:
        print(f"No openings for tenant {args.tenant}.")
        return
    print(f"Found {len(rows)} openings for tenant {args.tenant}:\n")
    for row in rows:
        print(f"ID: {row['id']}")
        print(f"  Title: {row['title']}")
        print(f"  Location: {row['location'] or '-'}")
        print(f"  Skills: {', '.join(row['required_skills']) or '-'}")
        print(f"  Experience: {row['required_experience']:g} yrs")
        print(f"  Status: {row['status']}")
        print(f"  Profiles: {row['profile_count']}")
        print()


def cmd_submit(args: argparse.Namespace, settings: Settings) -> None:
    path = _read_file(args.file)
    document = RawDocument(
        content=path.read_bytes(),
        content_type=args.content_type or guess_content_type(path.name),
        filename=path.name,
    )
    openings, profiles = _repositories(settings)
    pipeline = ResumePipeline(openings, profiles, settings=settings)
    result = submit_with_retry(
        pipeline,
        document,
        opening_id=args.opening,
        user_id=args.user,
        tenant_id=args.tenant,
        max_retries=settings.persist_retries,
    )
    _print_json(result.to_dict())


def cmd_list_profiles(args: argparse.Namespace, settings: Settings) -> None:
    _openings, profiles = _repositories(settings)
    rows = profiles.list_profiles(args.tenant)
    if not rows:
        print(f"No profiles for tenant {args.tenant}.")
        return
    print(f"Found {len(rows)} profiles for tenant {args.tenant}:\n")
    for row in rows:
        print(f"ID: {row['id']}")
        print(f"  File: {row['filename']}")
        print(f"  Opening: {row['opening_id']}")
        print(f"  User: {row['user_id']}")
        print(f"  Score: {row['final_score']:.4f} ({row['confidence']})")
        print(f"  Skills: {', '.join(row['candidate_skills']) or '-'}")
        print(f"  Experience: {row['candidate_experience']:g} yrs")
        print(f"  Location: {row['candidate_location']}")
        print(f"  Education: {row['candidate_education']}")
        print()


def cmd_score(args: argparse.Namespace, settings: Settings) -> None:
    """Score a résumé against ad-hoc requirements without touching the database."""
    path = _read_file(args.file)
    parsed = parse_document(path.read_bytes(), args.content_type or guess_content_type(path.name), path.name)
    requirement = JobRequirement(
        required_skills=[s.strip() for s in args.skills.split(",") if s.strip()] if args.skills else [],
        required_experience_years=args.experience,
        required_location=args.location or "",
    )
    features = extract_features(parsed.text, requirement.required_skills)
    score = score_candidate(features, requirement)
    _print_json({"features": features.to_dict(), "score": score.to_dict()})


def main(argv=None):
    # Load .env if present (RESUMESCORE_DB_PATH, RESUMESCORE_LOG_LEVEL, etc.)
    load_env()
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="resumescore", description="Deterministic résumé scoring against job openings")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    ini = subparsers.add_parser("init-db", help="Create the database tables")
    ini.set_defaults(func=cmd_init_db)

    add = subparsers.add_parser("add-opening", help="Validate an opening JSON and store it")
    add.add_argument("--input", required=True, help="Path to opening JSON input")
    add.set_defaults(func=cmd_add_opening)

    lso = subparsers.add_parser("list-openings", help="List a tenant's openings with profile counts")
    lso.add_argument("--tenant", required=True, help="Tenant id")
    lso.set_defaults(func=cmd_list_openings)

    sub = subparsers.add_parser("submit", help="Score a résumé against an opening and store the profile")
    sub.add_argument("--file", required=True, help="Path to the résumé (.pdf or .txt)")
    sub.add_argument("--opening", required=True, help="Opening id")
    sub.add_argument("--user", required=True, help="Submitting user id")
    sub.add_argument("--tenant", required=True, help="Tenant id")
    sub.add_argument("--content-type", help="Override the content type guessed from the file suffix")
    sub.set_defaults(func=cmd_submit)

    lsp = subparsers.add_parser("list-profiles", help="List a tenant's scored profiles, newest first")
    lsp.add_argument("--tenant", required=True, help="Tenant id")
    lsp.set_defaults(func=cmd_list_profiles)

    sco = subparsers.add_parser("score", help="Score a résumé against ad-hoc requirements (nothing is stored)")
    sco.add_argument("--file", required=True, help="Path to the résumé (.pdf or .txt)")
    sco.add_argument("--skills", help="Comma-separated required skills")
    sco.add_argument("--experience", type=float, default=0.0, help="Required years of experience")
    sco.add_argument("--location", help="Required location")
    sco.add_argument("--content-type", help="Override the content type guessed from the file suffix")
    sco.set_defaults(func=cmd_score)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    get_logger(level=settings.log_level, log_dir=settings.log_dir)
    try:
        args.func(args, settings)
    except PipelineError as e:
        raise SystemExit(f"{type(e).__name__}: {e}")
    except RetryError as e:
        raise SystemExit(f"Submission failed: {e}")


if __name__ == "__main__":
    main()
