"""Markup contract for catalog pages.

Every class token, tag and count the extractor relies on is declared here
and nowhere else. When the catalog markup drifts, this is the file to edit.

Shape of one listed track::

    <div>                                   <- container parent
      <div class="audio-wrapper ...">       <- ITEM_MARKER_CLASS
        <div class="pure-u-1-3">            <- COVER_REGION_CLASS
          ... <img src="cover.jpg"> ...
        </div>
        <div class="pure-u-2-3">            <- INFO_REGION_CLASS
          ... <b>Title</b> ...
          ... <strong><a href="...">Artist</a></strong> ...
          <div><span>Genre</span><span>Genre</span></div>
        </div>
      </div>
      <div class="mp3player">               <- PLAYER_CLASS
        <ul class="sm2-playlist-bd"><li><a href="track.mp3">...</a></li></ul>
      </div>
      <div class="legenddata">              <- LEGEND_CLASS
        <span>date</span><span>rating</span><span>downloads</span>
        <span>plays</span><span><a href="...?license=cc-by">license</a></span>
      </div>
    </div>
"""

from auboutdufil.common.checked_html import class_token_xpath

# -- Container signature -----------------------------------------------------

ITEM_MARKER_CLASS = "audio-wrapper"
INFO_REGION_CLASS = "pure-u-2-3"
COVER_REGION_CLASS = "pure-u-1-3"

# A container qualifies when it holds exactly one of each content region.
CONTENT_REGION_CLASSES = (INFO_REGION_CLASS, COVER_REGION_CLASS)
EXPECTED_REGION_COUNT = len(CONTENT_REGION_CLASSES)

ITEM_XPATH = f"//div[{class_token_xpath(ITEM_MARKER_CLASS)}]"


def region_xpath(region_class: str) -> str:
    """Descendant divs of a container carrying *region_class*."""
    return f".//div[{class_token_xpath(region_class)}]"


# -- Info region -------------------------------------------------------------

TITLE_XPATH = ".//b"
ARTIST_LINK_XPATH = "(.//strong)[1]//a"
# Genres are the span children of the first block that has any.
GENRE_TAG_XPATH = "(.//div[span])[1]/span"

# -- Cover region ------------------------------------------------------------

COVER_IMAGE_XPATH = ".//img"

# -- Sibling structures, reached through the container's parent --------------

PLAYER_CLASS = "mp3player"
PLAYLIST_CLASS = "sm2-playlist-bd"
DOWNLOAD_LINK_XPATH = (
    f".//*[{class_token_xpath(PLAYER_CLASS)}]"
    f"//*[{class_token_xpath(PLAYLIST_CLASS)}]//a"
)

LEGEND_CLASS = "legenddata"
LEGEND_XPATH = f".//*[{class_token_xpath(LEGEND_CLASS)}]"
LEGEND_SPAN_XPATH = ".//span[not(ancestor::span)]"

# Legend spans are told apart by content shape, not position. The two
# counts carry no marker of their own and are read in document order.
LEGEND_SLOTS = ("date", "rating", "downloads", "plays", "license")
COUNT_SLOTS = ("downloads", "plays")
LICENSE_LINK_XPATH = ".//a"

# -- Value formats -----------------------------------------------------------

DATE_FORMAT = "%d/%m/%Y"
DATE_SHAPE = r"\d{1,2}/\d{1,2}/\d{4}"
RATING_SEPARATOR = "/"
RATING_MAX = 5.0
LICENSE_MARKER = "license="
# Thousands separators seen in counts: space, no-break space, narrow
# no-break space.
THOUSANDS_SEPARATORS = (" ", "\u00a0", "\u202f")
