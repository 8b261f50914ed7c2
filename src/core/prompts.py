"""Prompt template for the itinerary generator."""
from __future__ import annotations

from src.core.schemas import EvidenceBlob, ItineraryPrompt, TripRequest

EVIDENCE_LABELS = {
    "snippet": ("titles and descriptions", "Titles and Descriptions"),
    "transcript": ("transcripts", "Transcripts"),
}

itinerary_prompt = """You are an expert travel agent. Your task is to create a detailed and practical travel itinerary by analyzing the **{evidence_label}** of multiple YouTube videos. You must adhere strictly to all the user's constraints.

**User's Trip Details:**
- **Trip Origin:** {start_location}
- **Destination:** {destination}
- **Duration:** {duration} days
- **Trip Style:** {trip_type}
- **Total Budget (approximate):** {budget}

**Your Task:**
1. Analyze the following collection of YouTube video {evidence_label} for '{destination}'.
2. Identify the most frequently mentioned landmarks, activities, restaurants, and tips.
3. Create a logical, day-by-day itinerary covering exactly {duration} days (a {duration}-day trip).
4. The itinerary must match the **{trip_type}** style. Prioritize suggestions that fit this style.
5. Provide an estimated daily cost breakdown and ensure the total trip cost stays within the approximate budget of **{budget}**.
6. If the trip is international (e.g., from {start_location} to {destination}), include a note about estimated travel time and potential flight costs, but focus the detailed itinerary on the destination itself.
7. Format the output using Markdown.

**Video Data ({evidence_heading}):**
---
{evidence}
"""


def build_itinerary_prompt(trip: TripRequest, evidence: EvidenceBlob) -> ItineraryPrompt:
    """Render the itinerary prompt. Pure and deterministic."""

    label, heading = EVIDENCE_LABELS[evidence.kind]
    return ItineraryPrompt(
        text=itinerary_prompt.format(
            evidence_label=label,
            evidence_heading=heading,
            start_location=trip.start_location,
            destination=trip.destination,
            duration=trip.duration,
            trip_type=trip.trip_type,
            budget=trip.budget,
            evidence=evidence.text,
        )
    )
