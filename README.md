# snoowire

snoowire is a small, synchronous client for the Reddit API, built on
`requests`. It covers the endpoints for:

- your account (`snoowire.account`): info, karma, settings, trophies,
  friends, blocked and trusted users
- comments (`snoowire.comment`): submitting and editing
- collections of posts in a subreddit (`snoowire.collection`)
- flair (`snoowire.flair`): user and post flair, templates, choices and
  bulk changes
- gold (`snoowire.gold`): gilding things and giving gold
- listings (`snoowire.listings`): fetching posts, comments and subreddits
  by their full IDs
- live threads (`snoowire.live_thread`): updates, discussions,
  contributors and permissions
- emoji (`snoowire.emoji`): listing, uploading, updating and deleting
  subreddit emoji

## Setting up a client

Every service is built around a `Client` from `snoowire.client`. The client
holds the base URL of the API (by default the OAuth API host), the name of
the account you act as, a `requests.Session` that carries your
authentication, and the user agent sent with each request.

```python
import requests

from snoowire.client import Client

session = requests.Session()
session.headers["Authorization"] = "Bearer token"

client = Client(username="someuser", session=session, user_agent="snoowire-example/0.1")
```

`Client.request` sends a request and returns the decoded JSON body (or
`None` for an empty body) together with a `Response`, which carries the
underlying HTTP response, its `status_code`, the last known `Rate` and the
`after`/`before` paging cursors of listings.

## Using the services

Each area of the API has its own service class that takes the client.
Methods return a tuple ending in the `Response`, or just the `Response`
when the endpoint has nothing else to give back.

```python
from snoowire.account import AccountService
from snoowire.collection import CollectionCreateRequest, CollectionService
from snoowire.flair import FlairSelectRequest, FlairService
from snoowire.gold import GoldService
from snoowire.live_thread import LiveThreadPermissions, LiveThreadService

karma, response = AccountService(client).karma()

collection, _ = CollectionService(client).create(
    CollectionCreateRequest(title="Weekly threads", subreddit_id="t5_abc123", layout="TIMELINE")
)

FlairService(client).select("somesubreddit", FlairSelectRequest(id="template-id", text="Regular"))

GoldService(client).give("someuser", 1)

LiveThreadService(client).invite("threadid", "someuser", LiveThreadPermissions(update=True))
```

Request objects such as `CollectionCreateRequest`, `FlairSelectRequest`,
`FlairConfigureRequest`, `FlairTemplateCreateOrUpdateRequest`,
`LiveThreadCreateOrUpdateRequest` and `EmojiCreateOrUpdateRequest` leave out
fields you do not set, so only what you give them is sent.

Paged endpoints such as `LiveThreadService.updates` and
`LiveThreadService.discussions` accept a `ListOptions` to set the page size
and the anchor to continue from.

Live thread permissions are written as `+name`/`-name` pairs;
`format_permissions(None)` gives `+all`, which is what the invite and
permission methods send when no permissions are given.

`EmojiService.upload` first asks for an upload lease, then posts the image
file to the leased storage address, then registers the emoji.

## Errors

Invalid arguments raise `ValueError` before any request is made: for
instance giving gold for 0 or more than 36 months, passing `None` where a
request object is needed, an emoji request without a name, an unknown live
thread report reason, or a flair change of fewer than 1 or more than 100
users.

Failed requests raise a subclass of `RedditError` from `snoowire.client`:

- `ErrorResponse` for an HTTP error status,
- `JSONErrorResponse` when the body of a successful response holds a list
  of `APIError` entries,
- `RateLimitError` for status 429; its `rate` tells you when the limit
  resets.

```python
from snoowire.client import RateLimitError, RedditError

try:
    GoldService(client).gild("t1_abc123")
except RateLimitError as exc:
    print("slow down:", exc)
except RedditError as exc:
    print("request failed:", exc)
```

## What it does not do

- It does not log in or obtain tokens: authentication is whatever the
  `requests.Session` you hand to `Client` carries.
- There is no private messaging service: the inbox, sent messages and
  composing messages are not covered.
- Posts, comments, subreddits, users and trophies are returned as plain
  JSON dictionaries; there are no typed models for them, and no services
  for subreddits, users, posts or voting.
- It is synchronous only and offers no streaming of new posts.