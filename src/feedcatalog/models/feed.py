"""Feed catalog models and the built-in default catalog."""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Feed(BaseModel):
    """A catalog entry describing one syndication source.

    Serialized with the wire names (ID, Title, ...) both on the HTTP
    boundary and in the persisted feed list.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default="", alias="ID", description="Store-assigned identifier")
    title: str = Field(default="", alias="Title")
    description: str = Field(default="", alias="Description")
    url: str = Field(default="", alias="URL", description="Feed source address, unique")
    image_url: str = Field(default="", alias="ImageURL", description="Optional display icon")
    category: str = Field(default="", alias="Category", description="Optional grouping label")


# The stored list is one JSON array
FeedList = TypeAdapter(list[Feed])


DEFAULT_FEEDS: tuple[Feed, ...] = (
    Feed(
        id="b1031651-411c-40bb-b269-d247794dfd59",
        title="BBC News - UK",
        description="BBC News - UK",
        url="http://feeds.bbci.co.uk/news/uk/rss.xml",
        image_url="https://news.bbcimg.co.uk/nol/shared/img/bbc_news_120x60.gif",
    ),
    Feed(
        id="c2970c84-37c8-4ec1-8861-4b5a91ebff0d",
        title="BBC News - Technology",
        description="BBC News - Technology",
        url="http://feeds.bbci.co.uk/news/technology/rss.xml",
        image_url="https://news.bbcimg.co.uk/nol/shared/img/bbc_news_120x60.gif",
    ),
    Feed(
        id="28059396-5113-46ed-b76b-6d482a3bbcf3",
        title="UK News - The latest headlines from the UK | Sky News",
        description=(
            "Expert comment and analysis on the latest UK news, with headlines "
            "from England, Scotland, Northern Ireland and Wales."
        ),
        url="http://feeds.skynews.com/feeds/rss/uk.xml",
        category="Sky News",
        image_url="http://feeds.skynews.com/images/web/logo/skynews_rss.png",
    ),
    Feed(
        id="a2370e4f-0e7f-4844-83cb-b54c02b0bf1f",
        title="Tech News - Latest Technology and Gadget News | Sky News",
        description=(
            "Sky News technology provides you with all the latest tech and gadget "
            "news, game reviews, Internet and web news across the globe. Visit us today."
        ),
        url="http://feeds.skynews.com/feeds/rss/technology.xml",
        category="Sky News",
        image_url="http://feeds.skynews.com/images/web/logo/skynews_rss.png",
    ),
)
