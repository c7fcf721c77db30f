"""School name normalizer for raw result rows.

Entrant identity is "school:name", so two spellings of one school split an
entrant's results and the school's totals. Normalization runs before
expansion:
  Phase 1: Case/whitespace merge: variants equal ignoring case and spacing
            fold into the most common spelling
  Phase 2: Suffix-aware merge: "Central" + "Central High School" → "Central High School"
  Phase 3: Fuzzy duplicate detection (informational, not auto-merged)
  Phase 4: Manual school-map: apply user-provided alias mapping (case-insensitive keys)
"""

import json
import re
from dataclasses import replace
from difflib import SequenceMatcher


# Trailing words that mark a full school name, longest first
_SCHOOL_SUFFIXES = (
    'high school', 'middle school', 'school', 'hs', 'academy',
    'prep', 'preparatory', 'high',
)


def _collapse(name: str) -> str:
    return re.sub(r'\s+', ' ', (name or '').strip())


def _base_names(name: str) -> list[str]:
    """Every shorter name `name` could extend by one school suffix.

    "Central High School" -> ["Central", "Central High"]
    """
    lower = name.lower()
    bases = []
    for suffix in _SCHOOL_SUFFIXES:
        if lower.endswith(' ' + suffix):
            base = name[:-(len(suffix) + 1)].strip()
            if base:
                bases.append(base)
    return bases


def _resolve(name: str, mapping: dict) -> str:
    """Follow a merge mapping to its final target."""
    seen = set()
    while name in mapping and name not in seen:
        seen.add(name)
        name = mapping[name]
    return name


def _rename(rows: list, mapping: dict) -> list:
    if not mapping:
        return rows
    return [replace(r, school=mapping[r.school]) if r.school in mapping else r
            for r in rows]


def normalize(rows: list, school_map_path: str | None = None) -> dict:
    """Normalize school names in raw result rows.

    Args:
        rows: List of RawResultRow (not modified; new rows are returned).
        school_map_path: Optional path to a JSON file mapping aliases to canonical names.

    Returns:
        Dict with:
          normalized_rows: list of RawResultRow with canonical school names
          school_report: {unique_schools, auto_merged, suffix_merged, potential_duplicates}
    """
    # ========================================
    # Phase 1: Case/whitespace merge
    # ========================================
    school_counts: dict[str, dict[str, int]] = {}  # lowercase -> {spelling: count}
    for r in rows:
        spelling = _collapse(r.school)
        if not spelling:
            continue
        variants = school_counts.setdefault(spelling.lower(), {})
        variants[spelling] = variants.get(spelling, 0) + 1

    canonical_for: dict[str, str] = {}  # lowercase -> canonical spelling
    auto_merged = {}
    for key, variants in school_counts.items():
        canonical = max(variants, key=lambda v: variants[v])
        canonical_for[key] = canonical
        for variant in variants:
            if variant != canonical:
                auto_merged[variant] = canonical

    case_map: dict[str, str] = {}  # raw cell text -> canonical
    for r in rows:
        spelling = _collapse(r.school)
        if spelling and r.school != canonical_for[spelling.lower()]:
            case_map[r.school] = canonical_for[spelling.lower()]

    rows = _rename(rows, case_map)

    # ========================================
    # Phase 2: Suffix-aware merge
    # ========================================
    counts: dict[str, int] = {}
    for r in rows:
        if r.school:
            counts[r.school] = counts.get(r.school, 0) + 1

    base_to_suffixed: dict[str, list[str]] = {}
    for school in counts:
        for base in _base_names(school):
            base_to_suffixed.setdefault(base, []).append(school)

    # Longest bases first, so "Central High" is settled before "Central"
    suffix_merged = {}
    for base in sorted(base_to_suffixed, key=len, reverse=True):
        if base not in counts:
            continue  # no bare form to merge
        forms = {_resolve(f, suffix_merged) for f in base_to_suffixed[base]} - {base}
        if not forms:
            continue
        best = max(forms, key=lambda s: (counts[s], s))
        for name in (base, *forms):
            if name != best:
                suffix_merged[name] = best
    suffix_merged = {k: _resolve(v, suffix_merged) for k, v in suffix_merged.items()}

    rows = _rename(rows, suffix_merged)

    # ========================================
    # Phase 3: Fuzzy duplicate detection
    # ========================================
    unique_schools = sorted({r.school for r in rows if r.school})
    potential_duplicates = []
    if len(unique_schools) <= 500:
        for i in range(len(unique_schools)):
            for j in range(i + 1, len(unique_schools)):
                s1, s2 = unique_schools[i], unique_schools[j]
                ratio = SequenceMatcher(None, s1.lower(), s2.lower()).ratio()
                if ratio > 0.80:
                    potential_duplicates.append((s1, s2, round(ratio, 2)))

    # ========================================
    # Phase 4: Manual school-map (case-insensitive)
    # ========================================
    if school_map_path:
        try:
            with open(school_map_path, 'r') as f:
                school_map = json.load(f)

            school_map_lower = {k.lower().strip(): v for k, v in school_map.items()}
            mapping = {}
            applied = 0
            for r in rows:
                key = r.school.lower().strip()
                if key in school_map_lower:
                    mapping[r.school] = school_map_lower[key]
                    applied += 1
            rows = _rename(rows, mapping)

            unique_schools = sorted({r.school for r in rows if r.school})
            print(f"School map applied: {applied} rows updated from {len(school_map)} mappings")
        except FileNotFoundError:
            print(f"Warning: School map file not found: {school_map_path}")
        except json.JSONDecodeError as e:
            print(f"Warning: Invalid JSON in school map file: {e}")

    return {
        'normalized_rows': rows,
        'school_report': {
            'unique_schools': unique_schools,
            'auto_merged': auto_merged,
            'suffix_merged': suffix_merged,
            'potential_duplicates': potential_duplicates,
        },
    }


def print_school_report(report: dict) -> None:
    """Print a human-readable school normalization report to stdout."""
    schools = report['unique_schools']
    merged = report['auto_merged']
    suffix = report.get('suffix_merged', {})
    dupes = report['potential_duplicates']

    total_merged = len(merged) + len(suffix)
    print(f"\nSchool normalization: {len(schools)} unique schools, "
          f"{total_merged} auto-merged ({len(merged)} case, {len(suffix)} suffix), "
          f"{len(dupes)} potential duplicates to review")

    for label, mapping in (('Case-merged', merged), ('Suffix-merged', suffix)):
        if not mapping:
            continue
        lines = [f'  "{k}" -> "{v}"' for k, v in sorted(mapping.items())]
        if len(lines) > 15:
            print(f"{label} (showing 15 of {len(lines)}):")
            print('\n'.join(lines[:15]))
        else:
            print(f"{label}:")
            print('\n'.join(lines))

    if dupes:
        print("Potential duplicates (>80% similar):")
        for s1, s2, ratio in dupes[:15]:
            print(f'  "{s1}" / "{s2}" ({int(ratio*100)}% similar)')
        if len(dupes) > 15:
            print(f"  ... and {len(dupes) - 15} more")
