"""
Benchmark corpus: ordinary seeds, the gold standard calibration library,
the failure library and the marker definitions used by the calibration checkers.
"""

from typing import Dict, List

from ..models import BenchmarkSeed

# Always present in every benchmark, whatever ordinary list is supplied.
ANCHOR_SEED = BenchmarkSeed(
    id="deep-ocean",
    name="Deep Ocean Predators",
    seed=(
        "A blue-chip sequence revealing the hunting strategies of deep-sea predators in the "
        "midnight zone: bioluminescent lures, pressure-adapted jaws, and the arms race between "
        "hunter and prey at 3,000 metres."
    ),
)

BENCHMARK_SEEDS: List[BenchmarkSeed] = [
    ANCHOR_SEED,
    BenchmarkSeed(
        id="arctic-migration",
        name="Arctic Bird Migration",
        seed=(
            "The annual pole-to-pole migration of Arctic terns, 70,000 km a year. Focus on "
            "navigational intelligence, physiological endurance and the climate disruption "
            "threatening the longest migration on Earth."
        ),
    ),
    BenchmarkSeed(
        id="insect-architects",
        name="Insect Architects",
        seed=(
            "The engineering of social insects: termite mounds with natural air conditioning, "
            "weaver ant bridges and paper wasp architecture, seen through what human engineers "
            "are learning from six-legged builders."
        ),
    ),
    BenchmarkSeed(
        id="netflix-predator",
        name="Netflix: Apex Rivals",
        seed=(
            "A four-part limited series on the rivalry between lions, hyenas and wild dogs on the "
            "Serengeti. Each episode follows one clan through the dry season, building to a "
            "confrontation at the last waterhole."
        ),
        platform="Netflix",
    ),
    BenchmarkSeed(
        id="ethical-edge",
        name="Invasive Species Dilemma",
        seed=(
            "The ethical paradox of invasive species management: feral cats devastating native "
            "birds in Australia, pythons overrunning the Everglades, and the kill-or-protect "
            "debate that divides conservationists."
        ),
    ),
]


def _gold(id, year, name, platform, expected_range, seed, **marker_overrides) -> BenchmarkSeed:
    markers = {marker["id"]: True for marker in GOLD_STANDARD_MARKERS}
    markers.update({key.replace("_", "-"): value for key, value in marker_overrides.items()})
    return BenchmarkSeed(
        id=id,
        name=name,
        seed=seed,
        platform=platform,
        is_calibration=True,
        expected_range=expected_range,
        markers=markers,
        year=year,
    )


GOLD_STANDARD_MARKERS: List[Dict[str, str]] = [
    {"id": "emotional-hook", "label": "Emotional Hook",
     "desc": "A clear emotional through-line (urgency, wonder or stakes) that grabs a viewer in the first ten seconds"},
    {"id": "franchise-positioning", "label": "Franchise / Brand Logic",
     "desc": "Sequel logic, trilogy arc or franchise positioning that builds on established brand equity"},
    {"id": "talent-attachment", "label": "Named Talent",
     "desc": "Specific named talent (narrator, composer, director, presenter) attached to the project"},
    {"id": "tech-innovation", "label": "Camera / Tech Innovation",
     "desc": "Cutting-edge production technology (drones, submersibles, thermal, macro) as a selling point"},
    {"id": "zeitgeist-relevance", "label": "Zeitgeist Relevance",
     "desc": "Connection to current cultural or environmental concerns such as climate or the Anthropocene"},
    {"id": "human-element", "label": "Human Element",
     "desc": "Human characters, defenders, scientists or communities woven into the narrative"},
    {"id": "tonal-evolution", "label": "Tonal Arc",
     "desc": "A deliberate tonal progression, not more of the same"},
    {"id": "commercial-viability", "label": "Commercial Viability",
     "desc": "Clear buyer appeal, global market fit and positioning against the existing catalogue"},
]

RED_FLAG_MARKERS: List[Dict[str, str]] = [
    {"id": "celebrity-vehicle", "label": "Celebrity Vehicle",
     "desc": "A celebrity or presenter is centred over the wildlife; the animals feel secondary"},
    {"id": "doom-without-agency", "label": "Doom Without Agency",
     "desc": "Relentless bleakness with no hope, viewer agency or conservation pathway"},
    {"id": "clickbait-premise", "label": "Clickbait Premise",
     "desc": "A sensationalist hook that overpromises or misleads"},
    {"id": "anthropomorphism", "label": "Excessive Anthropomorphism",
     "desc": "Animals given human soap-opera narratives that distort their biology"},
    {"id": "tech-solutionism", "label": "Tech Solutionism",
     "desc": "Complex ecological problems presented as easily solved by technology or simple fixes"},
    {"id": "shallow-opportunism", "label": "Shallow Opportunism",
     "desc": "Exploits a trending topic without genuine depth or scientific rigour"},
    {"id": "spectacle-over-substance", "label": "Spectacle Over Substance",
     "desc": "Effects, gore or shock value prioritised over accuracy and narrative depth"},
    {"id": "trust-breaking", "label": "Trust-Breaking",
     "desc": "Misleading claims, fake footage framing or deceptive marketing"},
]

FAILURE_LIBRARY: List[Dict] = [
    {"id": "fail-2016-before-the-flood", "year": 2016, "name": "Before the Flood",
     "failure": "Celebrity Travelogue", "red_flags": ["celebrity-vehicle", "doom-without-agency"]},
    {"id": "fail-2017-phelps-vs-shark", "year": 2017, "name": "Phelps vs. Shark",
     "failure": "Bait-and-Switch", "red_flags": ["clickbait-premise", "trust-breaking"]},
    {"id": "fail-2018-dynasties-chimp", "year": 2018, "name": "Dynasties (Chimp Episode)",
     "failure": "Excessive Anthropomorphism", "red_flags": ["anthropomorphism"]},
    {"id": "fail-2019-2040", "year": 2019, "name": "2040",
     "failure": "Cruel Optimism", "red_flags": ["tech-solutionism"]},
    {"id": "fail-2020-year-earth-changed", "year": 2020, "name": "The Year Earth Changed",
     "failure": "Shallow Opportunism", "red_flags": ["shallow-opportunism", "doom-without-agency"]},
    {"id": "fail-2021-perfect-planet", "year": 2021, "name": "A Perfect Planet (Final Episode)",
     "failure": "Propaganda Pivot", "red_flags": ["shallow-opportunism"]},
    {"id": "fail-2022-frozen-planet-ii", "year": 2022, "name": "Frozen Planet II",
     "failure": "Climate Fatigue", "red_flags": ["doom-without-agency", "spectacle-over-substance"]},
    {"id": "fail-2023-life-on-our-planet", "year": 2023, "name": "Life on Our Planet",
     "failure": "Uncanny Valley", "red_flags": ["spectacle-over-substance"]},
    {"id": "fail-2024-animals-up-close", "year": 2024, "name": "Animals Up Close",
     "failure": "TikTok-ification", "red_flags": ["celebrity-vehicle", "shallow-opportunism"]},
    {"id": "fail-2025-deep-sea-hoax", "year": 2025, "name": "Deep Sea Hoax",
     "failure": "Pseudo-Nature", "red_flags": ["trust-breaking", "spectacle-over-substance"]},
]


def red_flag_precedents(flag_id: str) -> List[str]:
    """Failure library productions that exhibited a red flag, as 'Name (Year)'."""
    return [f"{entry['name']} ({entry['year']})" for entry in FAILURE_LIBRARY if flag_id in entry["red_flags"]]


def red_flags_with_precedents() -> List[Dict[str, str]]:
    """Red flag definitions with their failure library precedents folded into the description."""
    flags = []
    for flag in RED_FLAG_MARKERS:
        precedents = red_flag_precedents(flag["id"])
        desc = flag["desc"]
        if precedents:
            desc = f"{desc}. Seen in: {', '.join(precedents)}"
        flags.append({**flag, "desc": desc})
    return flags


GOLD_STANDARD_LIBRARY: List[BenchmarkSeed] = [
    _gold(
        "gs-2016-planet-earth-ii", 2016, "Planet Earth II (BBC)", "BBC", (85, 95),
        "We are not filming nature, we are filming a blockbuster. Stabilised handhelds and drones put "
        "the camera inside the chase: hatchling iguanas running a gauntlet of racer snakes with the "
        "tension of an action film, in the landmark series' long-awaited return.",
        human_element=False,
    ),
    _gold(
        "gs-2017-blue-planet-ii", 2017, "Blue Planet II (BBC)", "BBC", (88, 95),
        "The ocean as a sophisticated society under siege. Tow-cams ride on orcas and suction-cup "
        "sensors show the world through a whale's eyes, but the wonder turns into a wake-up call "
        "about plastic in the food chain.",
    ),
    _gold(
        "gs-2018-dynasties", 2018, "Dynasties (BBC)", "BBC", (82, 92),
        "A royal drama for the animal kingdom. Five families (lion, chimpanzee, painted wolf, tiger, "
        "emperor penguin) followed for years through power struggles, betrayal and legacy.",
    ),
    _gold(
        "gs-2019-our-planet", 2019, "Our Planet (Netflix)", "Netflix", (86, 95),
        "The first global streaming event for the Earth. The beauty of every major habitat, and for "
        "the first time the environmental message at the centre of the story rather than in a "
        "closing coda.",
    ),
    _gold(
        "gs-2020-my-octopus-teacher", 2020, "My Octopus Teacher (Netflix)", "Netflix", (84, 93),
        "An intimate first-person story of a burnt-out filmmaker and a common octopus in a South "
        "African kelp forest. No orchestral swells, just a raw psychological journey about what "
        "another species can teach us.",
        franchise_positioning=False,
    ),
    _gold(
        "gs-2021-a-perfect-planet", 2021, "A Perfect Planet (BBC)", "BBC", (80, 90),
        "Earth as a machine driven by five forces: volcanoes, the sun, weather, oceans and humanity. "
        "Satellite data and high-concept visuals reveal the planet's life-support system and what "
        "happens when we tamper with it.",
        franchise_positioning=False,
    ),
    _gold(
        "gs-2022-prehistoric-planet", 2022, "Prehistoric Planet (Apple TV+)", "Apple TV+", (83, 93),
        "Dinosaurs filmed with the gear and naturalistic grammar of a modern wildlife series. No "
        "roaring monsters, just animals living their lives, built from the latest palaeontology and "
        "photoreal effects.",
        human_element=False,
    ),
    _gold(
        "gs-2023-planet-earth-iii", 2023, "Planet Earth III (BBC)", "BBC", (87, 95),
        "The trilogy's finale: the boundary between the wild and the human world has collapsed. "
        "Survivors of the Anthropocene adapt in real time to our cities and farms, and the people "
        "defending them take their place in the story.",
    ),
    _gold(
        "gs-2024-mammals", 2024, "Mammals (BBC)", "BBC", (84, 93),
        "Sixty-six million years ago the dinosaurs fell and our ancestors stepped out of the shadows. "
        "New low-light cameras reveal the hidden night world of the most successful animals on "
        "Earth, ourselves included.",
    ),
    _gold(
        "gs-2025-ocean", 2025, "Ocean (Disney+)", "Disney+", (85, 95),
        "Going where light does not exist. Ultra-sensitive sensors film the ocean's twilight zone "
        "without the artificial lights that scare its inhabitants away, revealing behaviour no one "
        "has seen and a reason for hope.",
    ),
]
