import io, zipfile, json
import streamlit as st
import re


# ---- preview helper: scale an SVG to a target pixel width (keeps aspect) ----

def _scale_svg_for_preview(svg_text: str, target_width_px: int) -> tuple[str, int]:
    """
    Returns (scaled_svg_text, new_height_px).
    Only used for UI preview; original SVGs stay full size for ZIP/PNG/PDF.
    """
    s = svg_text
    m = re.search(r'viewBox="0\s+0\s+([\d.]+)\s+([\d.]+)"', s)
    if not m:
        return s, 600  # fallback
    vw, vh = float(m.group(1)), float(m.group(2))

    scale = max(0.05, float(target_width_px) / max(1.0, vw))
    new_h = max(50, int(round(vh * scale)))

    # rewrite width/height only on the <svg ...> tag
    s = re.sub(r'(<svg\b[^>]*\bwidth=")[^"]+(")',  rf'\g<1>{int(target_width_px)}\g<2>', s, count=1)
    s = re.sub(r'(<svg\b[^>]*\bheight=")[^"]+(")', rf'\g<1>{new_h}\g<2>',            s, count=1)
    if 'preserveAspectRatio' not in s[:400]:
        s = re.sub(r'<svg\b', '<svg preserveAspectRatio="xMidYMid meet"', s, count=1)
    return s, new_h


def _uploaded_lines(f) -> list[str]:
    """Non-empty lines of an uploaded text file."""
    text = f.getvalue().decode("utf-8-sig")
    return [ln for ln in text.splitlines() if ln.strip()]


st.set_page_config(page_title="Word Wall", layout="wide")
st.title("Word Wall Generator")


# --- Controls in the sidebar ---
with st.sidebar:
    tab_build, tab_light, tab_settings = st.tabs(["Build Wall", "Highlight", "Settings"])

    # ---------------------------
    # TAB 1: Build Wall
    # ---------------------------
    with tab_build:
        sentence_files = st.file_uploader("Sentence files (one sentence per line)", type=["txt"],
                                          accept_multiple_files=True)
        filler_file = st.file_uploader("Filler words (optional)", type=["txt"])

        r1c1, r1c2 = st.columns(2)
        with r1c1:
            max_width = st.number_input("Max width (cm)", 1.0, 1000.0, 30.0)
        with r1c2:
            x_space = st.number_input("Letter spacing (cm)", 0.1, 20.0, 1.0)

        r2c1, r2c2 = st.columns(2)
        with r2c1:
            y_space = st.number_input("Row spacing (cm)", 0.1, 20.0, 1.2)
        with r2c2:
            letter_size = st.number_input("Letter size (cm)", 0.1, 20.0, 0.8)

        font_family = st.text_input("Font family", "Courier New")
        seed = st.number_input("Seed", 0, 2**31 - 1, 42, format="%d")

        to_upper = st.checkbox("Uppercase output", value=True)
        case_insensitive = st.checkbox("Merge words that differ only in case", value=False)
        add_fill = st.checkbox("Pad rows with filler words", value=True)
        include_clock = st.checkbox("Add word-clock vocabulary", value=False)
        order = st.selectbox("Same-pass order", ["insertion", "longest-first"])

        go = st.button("Generate", type="primary", use_container_width=True, disabled=not sentence_files)

    # ---------------------------
    # TAB 2: Highlight
    # ---------------------------
    with tab_light:
        grid_text = st.text_area(
            "Grid content (one line per row)",
            st.session_state.get("wall_text", "HAPPY\nBIRTHDAY\nTO YOU"),
            height=160,
        )
        sentence = st.text_input("Sentence to illuminate", "")
        contiguous = st.checkbox("Require contiguous letters", value=False)
        brightness = st.slider("LED brightness", 0, 255, 128)

    # ---------------------------
    # TAB 3: Settings
    # ---------------------------
    with tab_settings:
        st.caption("Output formats")
        make_png  = st.checkbox("Also make PNG", value=True)
        make_pdf  = st.checkbox("Also make PDF", value=False)
        make_pptx = st.checkbox("Also make PPTX (simple insert)", value=False)

        st.caption("Preview")
        size_label = st.select_slider("Preview size", options=["Small","Medium","Large"], value="Medium")
        PREVIEW_W = {"Small": 420, "Medium": 560, "Large": 720}[size_label]


try:
    import wordwall_engine as eng
    import grid_search as gs
    import highlight as hl
    import svg_renderer as svg
except Exception as e:
    st.error("Failed to import the word wall modules")
    st.exception(e)
    st.stop()

look = svg.WallAppearance(
    x_space_cm=x_space,
    y_space_cm=y_space,
    letter_size_cm=letter_size,
    font_family=font_family,
)


if go:
    # --- Read inputs ---
    try:
        sentences = []
        for f in sentence_files:
            sentences.extend(_uploaded_lines(f))
        fillers = _uploaded_lines(filler_file) if filler_file is not None else []
        cols = eng.columns_for_width(max_width, x_space)
    except Exception as e:
        st.error("Could not read the inputs")
        st.exception(e)
        st.stop()

    if not sentences:
        st.error("No sentences found.")
        st.stop()

    messages = []
    eng.set_logger(messages.append)
    svg.set_logger(messages.append)

    try:
        spec = eng.WallSpec(
            sentences=sentences,
            max_width=cols,
            add_fill=add_fill,
            filler_words=fillers,
            seed=int(seed),
            case_sensitive=not case_insensitive,
            to_upper=to_upper,
            include_clock=include_clock,
            flatten_order=order,
        )
        res = eng.generate_wall(spec)
        wall_svg = svg.render_wall_svg(res.lines, look)
    except Exception as e:
        st.error("Wall generation/rendering failed")
        st.exception(e)
        st.stop()

    st.session_state["wall_text"] = "\n".join(res.lines)

    c1, c2, c3 = st.columns(3)
    c1.metric("Rows", len(res.lines))
    c2.metric("Letters", res.letter_count)
    c3.metric("Sentences found", f"{len(res.checks) - len(res.failures)}/{len(res.checks)}")
    for f in res.failures:
        st.warning(f'Not found: "{f.sentence}" (stopped at {f.missing})')

    tab_prev, tab_text, tab_log = st.tabs(["Preview", "Text", "Log"])
    with tab_prev:
        svgp, hp = _scale_svg_for_preview(wall_svg, PREVIEW_W)
        st.components.v1.html(svgp, height=hp + 6, scrolling=False)
    with tab_text:
        st.code("\n".join(res.lines), language=None)
    with tab_log:
        st.code("\n".join(messages) or "(empty)", language=None)

    # --- ZIP outputs ---
    try:
        mem = io.BytesIO()
        with zipfile.ZipFile(mem, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("wall.svg", wall_svg)
            zf.writestr("wall.txt", "\n".join(res.lines) + "\n")

            if make_png or make_pdf or make_pptx:
                from cairosvg import svg2png, svg2pdf
                data = wall_svg.encode("utf-8")
                try:
                    if make_png:
                        zf.writestr("wall.png", svg2png(bytestring=data))
                except Exception as e:
                    zf.writestr("wall.PNG_ERROR.txt", f"PNG conversion failed:\n{e}".encode("utf-8"))

                try:
                    if make_pdf:
                        zf.writestr("wall.pdf", svg2pdf(bytestring=data))
                except Exception as e:
                    zf.writestr("wall.PDF_ERROR.txt", f"PDF conversion failed:\n{e}".encode("utf-8"))

                if make_pptx:
                    from pptx import Presentation
                    from pptx.util import Inches
                    prs = Presentation()
                    slide = prs.slides.add_slide(prs.slide_layouts[6])
                    slide.shapes.add_picture(io.BytesIO(svg2png(bytestring=data)),
                                             Inches(0.5), Inches(0.5), width=Inches(9))
                    out = io.BytesIO(); prs.save(out)
                    zf.writestr("wall.pptx", out.getvalue())

        mem.seek(0)
        st.download_button("Download ZIP", data=mem.read(), file_name="word_wall.zip", mime="application/zip")
    except Exception as e:
        st.error("Failed to package outputs")
        st.exception(e)
        st.stop()


# --- Highlight view ---
if sentence.strip():
    grid = hl.grid_from_text(grid_text)
    mode = "contiguous" if contiguous else "non-contiguous"
    found = gs.search_sentence(grid, sentence, mode=mode, case_insensitive=True)

    st.subheader("Highlight")
    if not found.complete:
        st.warning(f'Stopped at "{found.missing}"; showing the words found before it.')
    lit_svg = svg.render_highlight_svg(grid, found, look)
    svgp, hp = _scale_svg_for_preview(lit_svg, PREVIEW_W)
    st.components.v1.html(svgp, height=hp + 6, scrolling=False)

    with st.expander("LED payload"):
        st.write(f"LEDs: {hl.led_indices(grid, found)}")
        st.code(json.dumps(hl.wled_state(grid, found, brightness)), language="json")
