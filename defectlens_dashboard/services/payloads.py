"""Builders that turn dashboard input into the ``websiteData`` bundle the API consumes.

Each ``build_*`` function returns ``(website_data, source_url)``; both go
straight into the ``POST /analyze-website`` body.
"""
from typing import Dict, Any, List, Optional, Tuple
from pydantic import BaseModel

PLATFORMS: Dict[str, Dict[str, Any]] = {
    "instagram": {"label": "Instagram", "icon": "📸", "post_types": ["Feed Post", "Reel", "Story", "IGTV", "Carousel"]},
    "snapchat": {"label": "Snapchat", "icon": "👻", "post_types": ["Snap", "Story", "Spotlight"]},
    "tiktok": {"label": "TikTok", "icon": "🎵", "post_types": ["Video", "Duet", "Stitch", "Live"]},
    "twitter": {"label": "Twitter/X", "icon": "𝕏", "post_types": ["Tweet", "Thread", "Reply", "Retweet"]},
    "facebook": {"label": "Facebook", "icon": "📘", "post_types": ["Post", "Reel", "Story", "Video", "Event"]},
    "linkedin": {"label": "LinkedIn", "icon": "💼", "post_types": ["Post", "Article", "Video", "Poll"]},
    "youtube": {"label": "YouTube", "icon": "▶️", "post_types": ["Video", "Short", "Live", "Community Post"]},
}

PLATFORM_UX_ISSUES: Dict[str, List[Tuple[str, List[str]]]] = {
    "instagram": [
        ("Scrolling Issues", ["Reels scroll too fast", "Feed jumps back to top", "Stories auto-advance too quickly"]),
        ("Loading Problems", ["Images load slowly", "Reels buffer constantly", "Stories fail to load"]),
        ("Navigation Issues", ["Explore tab unresponsive", "DMs slow to open", "Profile takes forever"]),
        ("Video Playback", ["Audio desync", "Video quality drops", "Autoplay not working"]),
    ],
    "snapchat": [
        ("Camera Issues", ["Filters lag", "Camera freezes", "Lens effects delay"]),
        ("Story Problems", ["Stories won't upload", "Views not updating", "Story order jumbled"]),
        ("Chat Issues", ["Messages not sending", "Snaps stuck on pending", "Bitmoji not loading"]),
        ("Map Features", ["Location inaccurate", "Map loads slowly", "Friends not showing"]),
    ],
    "tiktok": [
        ("For You Page Issues", ["Videos repeat too often", "Scroll sensitivity too high", "Content not personalized"]),
        ("Video Problems", ["Videos won't play", "Sound cuts out", "Captions disappear"]),
        ("Upload Issues", ["Videos fail to post", "Drafts deleted", "Effects not applying"]),
        ("Live Stream Issues", ["Stream buffering", "Comments lag", "Gifts not sending"]),
    ],
    "twitter": [
        ("Timeline Problems", ["Tweets not loading", "Timeline jumps around", "Missing tweets from follows"]),
        ("Media Issues", ["Images won't expand", "Videos auto-muted", "GIFs not playing"]),
        ("Notification Issues", ["Delayed notifications", "Missing mentions", "DMs not alerting"]),
        ("Search Problems", ["Search results outdated", "Hashtags not working", "Trends inaccurate"]),
    ],
    "facebook": [
        ("News Feed Issues", ["Posts out of order", "Feed refreshes unexpectedly", "Same posts repeated"]),
        ("Video Problems", ["Reels buffer constantly", "Videos auto-play loudly", "Live streams lag"]),
        ("Messenger Issues", ["Messages delayed", "Calls drop frequently", "Reactions slow"]),
        ("Group Problems", ["Posts not appearing", "Notifications overwhelming", "Members list wrong"]),
    ],
    "linkedin": [
        ("Feed Issues", ["Posts load slowly", "Engagement counts wrong", "Old content shown"]),
        ("Connection Problems", ["Invites pending forever", "Profile views inaccurate", "Messages delayed"]),
        ("Job Search Issues", ["Filters don't work", "Applications fail", "Saved jobs disappear"]),
        ("Profile Problems", ["Edits not saving", "Skills section buggy", "Endorsements not showing"]),
    ],
    "youtube": [
        ("Playback Issues", ["Videos buffer constantly", "Quality changes randomly", "Subtitles out of sync"]),
        ("Shorts Problems", ["Scroll too sensitive", "Videos loop incorrectly", "Comments not loading"]),
        ("Subscription Issues", ["Missing uploads from subscriptions", "Notifications not working", "Watch later not saving"]),
        ("Comment Problems", ["Comments not posting", "Reply threads broken", "Likes not registering"]),
    ],
}

POST_SEPARATOR = "\n\n---\n\n"

class SocialPost(BaseModel):
    platform: str = "instagram"
    post_type: str = "Feed Post"
    caption: str = ""
    hashtags: str = ""
    mentions: str = ""
    likes: str = ""
    comments: str = ""
    shares: str = ""
    views: str = ""
    engagement_rate: str = ""
    post_date: str = ""
    additional_context: str = ""

def platform_label(platform: str) -> str:
    if platform not in PLATFORMS:
        raise ValueError(f"Unknown platform: {platform}")
    return PLATFORMS[platform]["label"]

def looks_like_html(content: str) -> bool:
    return content.strip().startswith("<") or "</" in content

def build_manual_payload(content: str, source: str = "") -> Tuple[Dict[str, Any], str]:
    source_url = source or "Manual Input"
    is_html = looks_like_html(content)
    website_data = {
        "markdown": None if is_html else content,
        "html": content if is_html else None,
        "links": [],
        "metadata": {"title": source or "Manual Content", "sourceURL": source_url},
    }
    return website_data, source_url

def format_platform_report(platform: str, platform_url: str, reported_issues: str = "") -> str:
    label = platform_label(platform)
    known_issues = "\n".join(
        f"\n{category}:\n" + "\n".join(f"  • {example}" for example in examples)
        for category, examples in PLATFORM_UX_ISSUES[platform]
    )
    return f"""
=== {label.upper()} PLATFORM UX/DEFECT ANALYSIS ===

PLATFORM: {label}
URL: {platform_url}

--- USER EXPERIENCE ISSUES TO ANALYZE ---
This is a {label} platform analysis. Analyze the platform for common UX defects and issues that users experience.

KNOWN COMMON ISSUES ON {label.upper()}:
{known_issues}

--- USER REPORTED ISSUES ---
{reported_issues or 'No specific issues reported. Analyze for general platform defects.'}

Please analyze this social media platform for:
1. SCROLLING DEFECTS - Issues like content scrolling too fast, unexpected jumps, sensitivity problems
2. LOADING PROBLEMS - Slow content load, buffering, images/videos not appearing
3. NAVIGATION BUGS - Unresponsive buttons, broken links, confusing UI flows
4. VIDEO/MEDIA ISSUES - Playback problems, audio sync, quality degradation
5. PERFORMANCE PROBLEMS - App freezing, crashes, memory issues, battery drain
6. NOTIFICATION BUGS - Delayed alerts, missing notifications, incorrect counts
7. CONTENT DISPLAY ISSUES - Layout problems, text cut off, image cropping
8. INTERACTION BUGS - Likes/comments not registering, shares failing

For each defect found:
- Describe the issue in simple everyday language
- Explain the ROOT CAUSE (why this happens technically)
- Provide PREVENTION steps (how users can avoid or fix it)
- Rate severity based on user impact
""".strip()

def build_platform_payload(platform: str, platform_url: str = "", reported_issues: str = "") -> Tuple[Dict[str, Any], str]:
    label = platform_label(platform)
    source_url = platform_url or f"{label} Platform"
    website_data = {
        "markdown": format_platform_report(platform, platform_url, reported_issues),
        "html": None,
        "links": [],
        "metadata": {
            "title": f"{label} Platform UX Analysis",
            "sourceURL": source_url,
            "platform": platform,
            "isSocialMedia": True,
            "analysisType": "platform-ux",
        },
    }
    return website_data, source_url

def format_social_post(post: SocialPost) -> str:
    label = platform_label(post.platform)
    return f"""
=== {label.upper()} {post.post_type.upper()} ANALYSIS ===

PLATFORM: {label}
POST TYPE: {post.post_type}
{f'DATE: {post.post_date}' if post.post_date else ''}

--- CONTENT ---
CAPTION/TEXT:
{post.caption or '[No caption provided]'}

HASHTAGS: {post.hashtags or 'None'}
MENTIONS: {post.mentions or 'None'}

--- ENGAGEMENT METRICS ---
Likes: {post.likes or 'N/A'}
Comments: {post.comments or 'N/A'}
Shares/Reposts: {post.shares or 'N/A'}
Views: {post.views or 'N/A'}
Engagement Rate: {post.engagement_rate or 'N/A'}

--- ADDITIONAL CONTEXT ---
{post.additional_context or 'None provided'}

Please analyze this social media content for:
1. Content Quality (grammar, clarity, messaging)
2. Engagement Potential (call-to-action, hashtag effectiveness)
3. Brand Safety (inappropriate content, potential controversy)
4. Platform Best Practices (optimal length, format usage)
5. Future Risks (trend relevance, potential backlash)
6. Improvement Recommendations
""".strip()

def build_posts_payload(posts: List[SocialPost], platform: Optional[str] = None) -> Tuple[Dict[str, Any], str]:
    """Bundle one or more posts; labelled after ``platform``, the form's current
    selection, falling back to the first post's platform."""
    if not posts:
        raise ValueError("At least one post is required")
    platform = platform or posts[0].platform
    label = platform_label(platform)
    source_url = f"{label} Analysis"
    website_data = {
        "markdown": POST_SEPARATOR.join(format_social_post(p) for p in posts),
        "html": None,
        "links": [],
        "metadata": {
            "title": f"{label} Content Analysis",
            "sourceURL": source_url,
            "platform": platform,
            "isSocialMedia": True,
            "analysisType": "post-content",
        },
    }
    return website_data, source_url
