"""Canned upstream documents and failure handlers for MockTransport."""

import httpx

DOCS_URL = "https://docs.example.test/influxdb/v1.2/concepts/glossary"
FEED_URL = "http://status.example.test/rss/s3-us-standard.rss"

RESOLVED_FEED = (
    b"<rss><channel><item><title>Service disruption: [RESOLVED] Increased "
    b"Error Rates</title></item></channel></rss>"
)
OPEN_INCIDENT_FEED = (
    b"<rss><channel><item><title>Informational message: Increased Error "
    b"Rates</title></item></channel></rss>"
)
EMPTY_FEED = b"<rss><channel></channel></rss>"

# Trimmed copy of the S3 (US Standard) status feed, leading newline included.
AWS_S3_FEED = b"""
<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Amazon Simple Storage Service (US Standard) Service Status</title>
    <link>http://status.aws.amazon.com/</link>
    <link rel="alternate" href="http://status.aws.amazon.com/rss/all.rss" type="application/rss+xml" title="Amazon Web Services Status Feed"/>
    <title type="text">Current service status feed for Amazon Simple Storage Service (US Standard).</title>
    <language>en-us</language>
    <pubDate>Wed,  8 Mar 2017 13:16:09 PST</pubDate>
    <ttl>5</ttl>

     <item>
      <title type="text">Service disruption: [RESOLVED] Increased Error Rates</title>
      <link>http://status.aws.amazon.com/</link>
      <pubDate>Tue, 28 Feb 2017 14:11:00 PST</pubDate>
      <guid>http://status.aws.amazon.com/#s3-us-standard_1488319860</guid>
      <description>The Amazon S3 service is operating normally.</description>
     </item>
    <item>
    <title type="text">Service disruption: Increased Error Rates</title>
    <link>http://status.aws.amazon.com/</link>
    <pubDate>Tue, 28 Feb 2017 13:13:00 PST</pubDate>
    <guid>http://status.aws.amazon.com/#s3-us-standard_1488316380</guid>
    <description>S3 object retrieval, listing and deletion are fully recovered now.</description>
    </item>
  </channel>
</rss>
"""


def refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


def time_out(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectTimeout("timed out", request=request)


def streamed(status_code: int, content: bytes = b"", headers=None) -> httpx.Response:
    """Build a response with its body still unread, as one off the network is.

    ``httpx.Response(content=...)`` loads the body eagerly, which leaves
    nothing for ``aiter_raw`` to stream.
    """
    return httpx.Response(status_code, headers=headers, stream=httpx.ByteStream(content))
