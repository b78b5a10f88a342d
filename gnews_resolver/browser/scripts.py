"""Read-only page scripts evaluated by the fallback strategies."""

CANONICAL_LINK = """() => {
    const link = document.querySelector("link[rel='canonical']");
    return link ? link.href : "";
}"""

META_REFRESH = """() => {
    const meta = document.querySelector("meta[http-equiv='refresh']");
    return meta ? meta.content : "";
}"""

ANCHOR_HREFS = """() => {
    const anchors = document.querySelectorAll("a");
    const links = [];
    for (let i = 0; i < anchors.length; i++) {
        links.push(anchors[i].href);
    }
    return links;
}"""

JSONLD_BLOCKS = """() => {
    const out = [];
    const scripts = document.querySelectorAll("script[type='application/ld+json']");
    for (let i = 0; i < scripts.length; i++) {
        out.push(scripts[i].innerText);
    }
    return out;
}"""

OUTER_HTML = "() => document.documentElement.outerHTML"
