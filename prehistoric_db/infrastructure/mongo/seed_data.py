"""Documents written by the migration and the sample data seeder.

The config document is rebuilt from these values on every migration run,
so editing APP_CONFIG_VALUES and re-running the migration is how the
application's enumerations are updated.
"""

from datetime import datetime
from typing import Any

from bson import ObjectId

from prehistoric_db.core.constants import APP_CONFIG_ID

APP_CONFIG_VALUES: dict[str, Any] = {
    "version": "1.0.0",
    "appName": "PRE_HISTORIC_VR",
    "description": "Virtual Reality Cultural Heritage Experience for Liberia",
    "totalTribes": 17,
    "supportedLanguages": ["English", "Bassa", "Kpelle", "Grebo", "Gio", "Mano"],
    "vrDeviceSupport": ["Mobile", "Google Cardboard", "Oculus Quest", "Desktop Browser"],
    "culturalPeriods": [
        "Prehistoric", "Ancient", "Medieval", "Colonial", "Modern", "Contemporary",
    ],
    "artifactCategories": [
        "Pottery", "Tools", "Weapons", "Masks", "Textiles", "Jewelry",
        "Musical Instruments", "Religious Objects", "Household Items", "Art",
        "Currency", "Other",
    ],
    "liberianCounties": [
        "Bomi", "Bong", "Gbarpolu", "Grand Bassa", "Grand Cape Mount",
        "Grand Gedeh", "Grand Kru", "Lofa", "Margibi", "Maryland",
        "Montserrado", "Nimba", "River Cess", "River Gee", "Sinoe",
    ],
    "liberianTribes": [
        "Bassa", "Belleh", "Dei", "Gbandi", "Gio", "Gola", "Grebo",
        "Kissi", "Kpelle", "Krahn", "Kru", "Lorma", "Mandingo",
        "Mano", "Mende", "Vai",
    ],
    "achievementTypes": [
        "First Steps", "Tribe Explorer", "Artifact Hunter", "VR Pioneer",
        "Cultural Scholar", "Language Learner", "Time Traveler", "Heritage Keeper",
        "Master Explorer", "Cultural Ambassador", "Digital Archaeologist",
    ],
    "featureFlags": {
        "aiChatEnabled": True,
        "vrExperiencesEnabled": True,
        "offlineModeEnabled": False,
        "communityFeaturesEnabled": True,
        "advancedAnalyticsEnabled": True,
    },
}


def build_app_config(
    now: datetime, values: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Return the full replacement document for the singleton config."""
    return {
        "_id": APP_CONFIG_ID,
        **(APP_CONFIG_VALUES if values is None else values),
        "createdAt": now,
        "updatedAt": now,
    }


def build_admin_user(email: str, password_hash: str, now: datetime) -> dict[str, Any]:
    """Return the administrative account document (without _id)."""
    return {
        "fullName": "PRE_HISTORIC_VR Admin",
        "email": email,
        "password": password_hash,
        "tribe": "Bassa",
        "county": "Montserrado",
        "gender": "Other",
        "ageGroup": "26-35",
        "educationLevel": "University",
        "interests": ["All Tribes", "Archaeology", "VR Technology", "Cultural Preservation"],
        "profileImage": None,
        "onboardingCompleted": True,
        "vrExperiencesCompleted": [],
        "tribesVisited": [],
        "artifactsViewed": [],
        "achievements": ["System Administrator"],
        "totalLearningTime": 0,
        "aiConversations": [],
        "notifications": True,
        "language": "English",
        "isAdmin": True,
        "createdAt": now,
        "updatedAt": now,
    }


def _tribe(
    name: str,
    alternative_names: list[str],
    region: str,
    counties: list[str],
    latitude: float,
    longitude: float,
    description: str,
    population: int,
    featured: bool,
    now: datetime,
) -> dict[str, Any]:
    return {
        "name": name,
        "displayName": f"{name} People",
        "alternativeNames": alternative_names,
        "primaryRegions": [region],
        "counties": counties,
        "coordinates": {"latitude": latitude, "longitude": longitude},
        "description": description,
        "population": {
            "estimated": population,
            "year": 2023,
            "source": "Liberian Census Bureau",
        },
        "featured": featured,
        "visibility": True,
        "viewCount": 0,
        "createdAt": now,
        "updatedAt": now,
    }


def build_sample_tribes(now: datetime) -> list[dict[str, Any]]:
    return [
        _tribe(
            "Bassa",
            ["Gbassa"],
            "Central Liberia",
            ["Grand Bassa", "Margibi", "Nimba"],
            6.2311,
            -9.4295,
            "The Bassa are one of the largest ethnic groups in Liberia, known for "
            "their rich cultural heritage and traditional governance systems.",
            350000,
            True,
            now,
        ),
        _tribe(
            "Kpelle",
            ["Guerze", "Kpessi"],
            "Central and Northern Liberia",
            ["Bong", "Lofa", "Nimba"],
            7.2547,
            -9.2677,
            "The Kpelle are the largest ethnic group in Liberia, known for their "
            "agricultural expertise and rich oral traditions.",
            500000,
            True,
            now,
        ),
        _tribe(
            "Grebo",
            ["Glebo"],
            "Southeastern Liberia",
            ["Maryland", "Grand Kru", "River Gee"],
            4.7362,
            -7.7336,
            "The Grebo people are known for their warrior traditions and coastal "
            "settlements along southeastern Liberia.",
            250000,
            False,
            now,
        ),
    ]


def build_sample_artifacts(
    bassa_id: ObjectId, kpelle_id: ObjectId, now: datetime
) -> list[dict[str, Any]]:
    common = {"visibility": True, "viewCount": 0, "likes": 0, "createdAt": now, "updatedAt": now}
    return [
        {
            "name": "Traditional Bassa Mask",
            "displayName": "Sacred Poro Initiation Mask",
            "category": "Masks",
            "tribe": bassa_id,
            "culturalPeriod": "Ancient",
            "description": "Sacred wooden mask used in traditional Bassa Poro society "
            "initiation ceremonies.",
            "featured": True,
            "tags": ["ceremonial", "wood", "sacred", "initiation"],
            **common,
        },
        {
            "name": "Kpelle Farming Tool",
            "displayName": "Traditional Iron Hoe",
            "category": "Tools",
            "tribe": kpelle_id,
            "culturalPeriod": "Medieval",
            "description": "Iron farming tool used by Kpelle people for agricultural "
            "work in forest regions.",
            "featured": False,
            "tags": ["farming", "iron", "agriculture", "tool"],
            **common,
        },
    ]


def build_sample_vr_experiences(bassa_id: ObjectId, now: datetime) -> list[dict[str, Any]]:
    return [
        {
            "title": "Ancient Bassa Village Experience",
            "subtitle": "Journey through a traditional Bassa settlement",
            "description": "Experience life in a traditional Bassa village with authentic "
            "architecture, daily activities, and cultural practices.",
            "category": "Tribal Village",
            "difficulty": "Beginner",
            "tribe": bassa_id,
            "historicalPeriod": "Ancient",
            "status": "Published",
            "visibility": "Public",
            "featured": True,
            "analytics": {
                "totalViews": 0,
                "completionRate": 0,
                "averageTimeSpent": 0,
                "userRatings": [],
                "commonIssues": [],
            },
            "createdAt": now,
            "updatedAt": now,
        }
    ]
