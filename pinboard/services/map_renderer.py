"""
Map Page Renderer

Builds the interactive Leaflet page of a session with folium: base tiles,
the place search control, every annotation drawn so far, and the script
that forwards clicks and search selections to the API and draws the
annotations it returns.
"""

import logging
from typing import List

import folium
from folium.elements import JSCSSMixin
from jinja2 import Template

from pinboard.core.config import settings
from pinboard.schemas.map import (
    CircleAnnotation,
    FitBoundsAnnotation,
    MapAnnotation,
    MarkerAnnotation,
)

logger = logging.getLogger(__name__)


class MapEventBridge(JSCSSMixin, folium.MacroElement):
    """
    Wires the browser map to the location API.

    Adds a Nominatim search control, forwards its selections and map clicks
    as JSON events, applies the returned annotations, and provides the
    export button.
    """

    _template = Template(
        """
        {% macro html(this, kwargs) %}
            <button id="exportBtn" style="position: fixed; bottom: 30px; left: 10px;
                z-index: 1000; padding: 6px 12px; background: white;
                border: 2px solid rgba(0,0,0,0.2); border-radius: 4px; cursor: pointer;">
                Export Locations
            </button>
        {% endmacro %}

        {% macro script(this, kwargs) %}
            (function() {
                var map = {{ this._parent.get_name() }};
                var apiUrl = {{ this.api_url|tojson }};

                function applyAnnotations(annotations) {
                    annotations.forEach(function(a) {
                        if (a.kind === "fit_bounds") {
                            map.fitBounds(
                                [[a.bbox.south, a.bbox.west], [a.bbox.north, a.bbox.east]],
                                {padding: [a.padding, a.padding]}
                            );
                        } else if (a.kind === "circle") {
                            L.circle([a.center.latitude, a.center.longitude], {
                                radius: a.radius_meters,
                                color: a.color,
                                fillOpacity: a.fill_opacity
                            }).addTo(map);
                        } else if (a.kind === "marker") {
                            L.marker([a.coordinates.latitude, a.coordinates.longitude])
                                .addTo(map)
                                .bindPopup(a.popup_html)
                                .openPopup();
                        }
                    });
                }

                async function postEvent(path, body) {
                    var response = await fetch(apiUrl + path, {
                        method: "POST",
                        headers: {"Content-Type": "application/json"},
                        body: JSON.stringify(body)
                    });
                    if (!response.ok) {
                        console.error("Map event rejected:", response.status);
                        return;
                    }
                    var result = await response.json();
                    applyAnnotations(result.annotations);
                }

                L.Control.geocoder({
                    position: "topright",
                    placeholder: {{ this.placeholder|tojson }},
                    errorMessage: {{ this.error_message|tojson }},
                    showResultIcons: true,
                    defaultMarkGeocode: false,
                    geocoder: L.Control.Geocoder.nominatim({
                        serviceUrl: {{ this.nominatim_url|tojson }},
                        geocodingQueryParams: {
                            countrycodes: {{ this.country_codes|tojson }},
                            limit: {{ this.limit|tojson }}
                        }
                    })
                }).on("markgeocode", function(e) {
                    var g = e.geocode;
                    postEvent("/locations/search-selections", {
                        center: {latitude: g.center.lat, longitude: g.center.lng},
                        name: g.name || "",
                        bbox: {
                            south: g.bbox.getSouth(),
                            west: g.bbox.getWest(),
                            north: g.bbox.getNorth(),
                            east: g.bbox.getEast()
                        }
                    });
                }).addTo(map);

                map.on("click", function(e) {
                    var latlng = e.latlng.wrap();
                    postEvent("/locations/clicks", {latitude: latlng.lat, longitude: latlng.lng});
                });

                document.getElementById("exportBtn").addEventListener("click", async function() {
                    var response = await fetch(apiUrl + "/locations/export");
                    if (!response.ok) {
                        var error = await response.json();
                        alert(error.detail);
                        return;
                    }
                    var blob = await response.blob();
                    var url = URL.createObjectURL(blob);
                    var link = document.createElement("a");
                    link.href = url;
                    link.download = {{ this.export_filename|tojson }};
                    link.click();
                    URL.revokeObjectURL(url);
                });
            })();
        {% endmacro %}
        """
    )

    default_js = [
        (
            "Control.Geocoder.js",
            "https://unpkg.com/leaflet-control-geocoder/dist/Control.Geocoder.js",
        )
    ]
    default_css = [
        (
            "Control.Geocoder.css",
            "https://unpkg.com/leaflet-control-geocoder/dist/Control.Geocoder.css",
        )
    ]

    def __init__(self, api_url: str):
        super().__init__()
        self._name = "MapEventBridge"
        self.api_url = api_url
        self.nominatim_url = settings.NOMINATIM_API_URL.rstrip("/") + "/"
        self.country_codes = settings.SEARCH_COUNTRY_CODES
        self.limit = settings.SEARCH_RESULT_LIMIT
        self.placeholder = "Search locations..."
        self.error_message = "Not found"
        self.export_filename = settings.EXPORT_FILENAME


def create_map() -> folium.Map:
    """
    Create the base map with the configured view constraints and tiles.
    """
    return folium.Map(
        location=(settings.MAP_INITIAL_LATITUDE, settings.MAP_INITIAL_LONGITUDE),
        zoom_start=settings.MAP_INITIAL_ZOOM,
        min_zoom=settings.MAP_MIN_ZOOM,
        max_zoom=settings.MAP_MAX_ZOOM,
        tiles=settings.MAP_TILE_URL,
        attr=settings.MAP_TILE_ATTRIBUTION,
    )


def add_annotation(m: folium.Map, annotation: MapAnnotation) -> None:
    """Replay one recorded annotation onto a folium map."""
    if isinstance(annotation, FitBoundsAnnotation):
        m.fit_bounds(
            annotation.bbox.corners(),
            padding=(annotation.padding, annotation.padding),
        )
    elif isinstance(annotation, CircleAnnotation):
        folium.Circle(
            location=(annotation.center.latitude, annotation.center.longitude),
            radius=annotation.radius_meters,
            color=annotation.color,
            fill=True,
            fill_opacity=annotation.fill_opacity,
        ).add_to(m)
    elif isinstance(annotation, MarkerAnnotation):
        folium.Marker(
            location=(annotation.coordinates.latitude, annotation.coordinates.longitude),
            popup=folium.Popup(annotation.popup_html),
        ).add_to(m)
    else:
        raise TypeError(f"Unsupported annotation: {annotation!r}")


def render_map_page(annotations: List[MapAnnotation]) -> str:
    """
    Render the full HTML page for a session.

    Args:
        annotations: Annotations drawn so far, in draw order

    Returns:
        A standalone HTML document
    """
    m = create_map()
    for annotation in annotations:
        add_annotation(m, annotation)
    MapEventBridge(api_url=settings.API_V1_STR).add_to(m)

    logger.debug("Rendered map page with %d annotations", len(annotations))
    return m.get_root().render()
