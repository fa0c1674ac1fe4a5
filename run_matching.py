"""Seed an in-memory catalog and print career matches for a profile. Use: python run_matching.py profile.json"""
import argparse
import json
import sys

from career_match_ai.embeddings import get_embedding_service
from career_match_ai.errors import CareerMatchError
from career_match_ai.ranking import MatchingEngine, clamp_match_limit, run_career_matching
from career_match_ai.schemas import UserProfile
from career_match_ai.services import search_careers, search_results_page, seed_careers
from career_match_ai.storage import InMemoryStore
from career_match_ai.utils import parse_skill_list


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("profile", help="Path to a UserProfile JSON file")
    parser.add_argument("--limit", type=int, default=None, help="Number of matches (1-20)")
    parser.add_argument("--user-id", default="local-user")
    parser.add_argument("--providers", default=None, help="Comma-separated embedding providers, in order")
    parser.add_argument("--skills", default=None, help="Also list catalog careers needing these skills")
    args = parser.parse_args(argv)

    with open(args.profile, encoding="utf-8") as f:
        profile = UserProfile.model_validate(json.load(f))

    providers = parse_skill_list(args.providers) or None
    embedding_service = get_embedding_service(providers)
    store = InMemoryStore()
    careers = seed_careers(store, embedding_service)

    if args.skills:
        found = search_careers(careers, skills=parse_skill_list(args.skills))
        print(json.dumps(search_results_page(found), indent=2, ensure_ascii=False))

    engine = MatchingEngine(embedding_service, store, store)
    try:
        matches = run_career_matching(engine, args.user_id, profile, clamp_match_limit(args.limit))
    except CareerMatchError as e:
        print(f"Matching failed: {e}", file=sys.stderr)
        return 1
    print(json.dumps([m.to_enhanced_match().model_dump() for m in matches], indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
