"""Profession taxonomy and classification keyword tables."""

# Category -> allowed sub-categories; the first entry is the fallback
PROFESSION_TAXONOMY: dict[str, list[str]] = {
    "Movie/TV": [
        "Actor",
        "Actress",
        "Director",
        "Producer",
        "Screenwriter",
        "TV Personality",
    ],
    "Music": ["Rapper", "Singer", "Musician", "Songwriter", "DJ"],
    "Comedy": ["Stand-up Comedian", "Sketch Comedian", "Comedy Actor"],
    "Sports": ["Basketball Player", "Football Player", "Olympian", "Athlete"],
    "Food/Culinary": ["Chef", "Food Critic", "Restaurateur"],
    "Internet/Social Media": ["YouTuber", "TikToker", "Streamer", "Influencer"],
    "Other": ["Author", "Scientist", "Politician", "Journalist"],
}

UNCATEGORIZED_CATEGORY = "Other"
UNCATEGORIZED_SUB_CATEGORY = "Unknown"

# Declaration order is the output order of classify()
CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "Movie/TV": [
        "actor", "actress", "acting", "film", "movie", "director", "producer",
        "television", "tv show", "series", "hollywood", "cinema", "screenwriter",
    ],
    "Music": [
        "singer", "rapper", "musician", "album", "song", "music", "band",
        "artist", "grammy", "billboard", "record", "songwriter", "dj",
    ],
    "Comedy": [
        "comedian", "comedy", "stand-up", "standup", "sketch", "funny",
        "humor", "snl", "saturday night live", "comic",
    ],
    "Sports": [
        "player", "athlete", "sports", "basketball", "football", "baseball",
        "soccer", "tennis", "olympics", "nba", "nfl", "mlb", "championship",
    ],
    "Food/Culinary": [
        "chef", "cook", "restaurant", "culinary", "food", "kitchen",
        "cuisine", "michelin", "cookbook",
    ],
    "Internet/Social Media": [
        "youtuber", "youtube", "tiktoker", "tiktok", "streamer", "twitch",
        "influencer", "social media", "viral", "content creator",
    ],
}

SUB_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "Actor": ["actor", "acting"],
    "Actress": ["actress"],
    "Director": ["director", "directing"],
    "Producer": ["producer", "producing"],
    "Rapper": ["rapper", "rap", "hip hop", "hip-hop"],
    "Singer": ["singer", "singing", "vocalist"],
    "Musician": ["musician", "music"],
    "Stand-up Comedian": ["stand-up", "standup"],
    "Basketball Player": ["basketball", "nba"],
    "Football Player": ["football", "nfl"],
    "Chef": ["chef", "cook"],
    "YouTuber": ["youtube", "youtuber"],
    "TikToker": ["tiktok", "tiktoker"],
    "Streamer": ["streamer", "twitch"],
}
