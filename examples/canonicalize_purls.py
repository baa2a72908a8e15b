"""
Example: Canonicalize package URLs from an SBOM-like list.

Usage:
    python examples/canonicalize_purls.py
"""

from purlkit import PackageURL, PurlError, parse


def main():
    raw = [
        "pkg:PYPI/Django_package@1.11.1.dev1",
        "pkg:Rpm/fedora/curl@7.50.3-1.fc25?Distro=fedora-25&Arch=i386",
        "pkg:npm/%40angular/animation@12.3.1",
        "pkg:swift/Alamofire@5.4.3",
    ]

    for purl in raw:
        try:
            print(f"{purl}\n  -> {parse(purl)}")
        except PurlError as e:
            print(f"{purl}\n  !! {type(e).__name__}: {e}")

    # Build from components gathered elsewhere (unordered qualifier data)
    built = PackageURL(
        type="maven",
        namespace="org.apache.commons",
        name="commons-lang3",
        version="3.12.0",
        qualifiers={"type": "jar", "classifier": "sources"},
    ).normalize()
    print(f"\nBuilt: {built}")


if __name__ == "__main__":
    main()
