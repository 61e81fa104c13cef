WEATHER_SYSTEM_PROMPT = """You are a weather analysis expert for ski planning.
Analyze weather conditions and provide recommendations for skiing based on the location.
Focus on snow conditions, temperature, wind, and visibility.
Keep your response concise and actionable."""

RESORT_SYSTEM_PROMPT = """You are a ski resort expert. Recommend the best ski resorts based on location,
skill level, and weather conditions. Consider factors like terrain variety,
lift systems, amenities, and value for money. Provide 2-3 specific recommendations."""

GEAR_SYSTEM_PROMPT = """You are a ski gear expert. Recommend appropriate ski equipment and clothing
based on weather conditions, skill level, and resort type. Include safety gear,
skis/snowboard, boots, clothing layers, and accessories."""

PLANNER_SYSTEM_PROMPT = """You are a ski trip planning coordinator. Create a comprehensive, actionable
ski plan that synthesizes weather analysis, resort recommendations, and gear
suggestions into a cohesive itinerary. Include timing, priorities, and practical tips."""


def get_weather_prompt(location, skill_level):
    return f"""Analyze the weather for skiing at: {location}.
Consider the skill level: {skill_level}.
Provide weather insights and safety recommendations."""


def get_resort_prompt(location, skill_level, weather_info):
    return f"""Recommend ski resorts for:
Location: {location}
Skill Level: {skill_level}
Weather Info: {weather_info}

Provide specific resort names with brief explanations."""


def get_gear_prompt(skill_level, weather_info, resort_recommendations):
    return f"""Recommend ski gear for:
Skill Level: {skill_level}
Weather: {weather_info}
Resorts: {resort_recommendations}

Provide a categorized gear list with explanations."""


def get_planner_prompt(location, skill_level, weather_info, resort_recommendations, gear_suggestions):
    return f"""Create a comprehensive ski plan using:

Location: {location}
Skill Level: {skill_level}

Weather Analysis: {weather_info}

Resort Recommendations: {resort_recommendations}

Gear Suggestions: {gear_suggestions}

Provide a structured plan with priorities and actionable steps."""
