"""
Per-slot task instructions. The sequencer places one of these at the top of
each agent's context, above the seed and the team's prior outputs.
"""

# Generation mode

DISCOVERY_TASK = """Search for recent scientific findings relevant to the seed idea below and produce your Discovery Brief."""

MARKET_TASK = """Analyse the seed idea below against current buyer mandates and produce your Market Mandate, including the Narrative Strategy Recommendation."""

SCIENCE_TASK = """Run your Scientific Viability Gate on the seed idea below first. If it passes, produce the Animal Fact Sheet, drawing on the Discovery Brief."""

LOGISTICS_TASK = """Run your Ethical Viability Gate on the seed idea and the proposed behaviour first. If it passes, produce the Logistics & Feasibility Breakdown for the Chief Scientist's hero behaviour."""

DRAFT_TASK = """Synthesise the Market Mandate, Animal Fact Sheet and Logistics Breakdown into a complete pitch narrative (Draft V1). Follow the Market Analyst's narrative strategy and weave the B-Story into the narrative."""

MURDER_BOARD_TASK = """This is the Murder Board. Review the team's Draft V1 package and attack it on all eight vectors. Start with the Greenlight Score."""

DIRECTIVES_TASK = """The Commissioning Editor has issued a critique. Turn every point into a numbered list of revision directives, each routed to the responsible role."""

REVISION_TASK = """Apply every one of the Showrunner's revision directives and deliver Draft V2 in full. Do not summarise; deliver the complete revised narrative and A/V script."""

GREENLIGHT_REVIEW_TASK = """Review Draft V2 against your Murder Board critique. Have the fatal flaws been addressed? Start with the Greenlight Score as "Score: NN/100"."""

GATEKEEPER_TASK = """Audit the latest draft before the final deck is compiled. Run the Canon Audit, YouTuber Check, Lawsuit Check and Boring Check, and state the fixes the Showrunner must make."""

FINAL_DECK_TASK = """Compile the final Master Pitch Deck from the latest draft, folding in the Gatekeeper's fixes. Output only the deck, starting with the title heading."""

# Quality revision rounds, repeated while the Commissioning Editor scores below greenlight

TARGETED_DIRECTIVES_TASK = """The Commissioning Editor scored the latest draft below greenlight. Issue surgical revision directives aimed only at the failings named in the most recent review. Do not request a complete rewrite."""

REDRAFT_TASK = """Apply the Showrunner's latest targeted directives and deliver the next draft in full. Fix the specific issues; do not regress on what already works."""

RE_REVIEW_TASK = """Review the newest draft against your previous review. Have the specific failings been addressed? Start with the Greenlight Score as "Score: NN/100"."""

# Assessment mode: the input is existing material (script, treatment or pitch)

ASSESS_MARKET_TASK = """The material below is an existing script or treatment. Assess its market position: buyer fit, slate gaps, fatigue risks and the best platform."""

ASSESS_SCIENCE_TASK = """Run your Scientific Viability Gate on the submitted material first. If it passes, fact-check every biological claim and list corrections."""

ASSESS_LOGISTICS_TASK = """Run your Ethical Viability Gate on the filming methods implied by the submitted material first. If it passes, assess shoot feasibility and budget."""

ASSESS_CRITIQUE_TASK = """Review the submitted material together with the team's assessments and attack it on all eight vectors. Start with the Greenlight Score."""

OPTIMISATION_PLAN_TASK = """Turn the critique and assessments into a numbered optimisation plan for the submitted material, each item routed to the responsible role."""

OPTIMISED_SCRIPT_TASK = """Rewrite the submitted material, applying every item of the Showrunner's optimisation plan. Keep the original premise and species."""

FINAL_REVIEW_TASK = """Give the optimised script a final review. Score it and list any remaining blockers."""

ASSESS_FINAL_DECK_TASK = """Compile the final Master Pitch Deck from the optimised script, resolving the final review's blockers. Output only the deck, starting with the title heading."""

# Genre keys accepted by RunOptions.genre; any other value is used verbatim.
GENRE_LABELS = {
    "scientific-procedural": "Scientific Procedural: the forensic ecology of eDNA, satellite tags and AI",
    "nature-noir": "Nature Noir: investigative true crime for the planet",
    "speculative-nh": "Speculative Natural History: science-grounded future-casts of ecosystems",
    "urban-rewilding": "Urban Rewilding: wildlife adapting to industrial and urban ruins",
    "biocultural-history": "Biocultural History: deep-time essays on landscapes and civilisations",
    "blue-chip-2": "Blue Chip 2.0: verified-real captures of rare behaviour with zero human footprint",
    "indigenous-wisdom": "Indigenous Wisdom: narratives co-created with traditional ecological knowledge",
    "ecological-biography": "Ecological Biography: decades-long tracking of a single organism",
    "extreme-micro": "Extreme Micro: alien worlds at the cellular scale",
    "astro-ecology": "Astro-Ecology: planetary cycles seen from orbit",
    "process-doc": "The Process Doc: the difficulty and ethics of the shoot as proof-of-work",
    "symbiotic-pov": "Symbiotic POV: immersion through on-animal cameras and bio-logging",
}

GENRE_LOCK_TEMPLATE = """This pitch is locked to the **{genre}** genre unless the seed text explicitly names a different one.
Narrative structure, tone, camera language, pacing, sound and scoring criteria must all serve this genre. The Market Analyst's narrative strategy is subordinate to it. Drift into another genre's conventions is GENRE DRIFT and counts as a fatal flaw."""
