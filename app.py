import gradio as gr

from schema_generator.handlers import (
    handle_corpus_upload,
    handle_ref_config_upload,
    process_schema_handler,
)

# --- UI Definition ---
with gr.Blocks(title="Schema Generator") as demo:
    gr.Markdown("# Schema Generator")
    gr.Markdown(
        "Upload a JSON file mapping group names to sample records to infer a field schema per group. "
        "Optionally add a ref-config to fill reference targets that could not be guessed."
    )

    # State
    ref_config_state = gr.State()

    with gr.Row():
        # Left Panel: Inputs
        with gr.Column(scale=1):
            gr.Markdown("### 1. Sample Data")
            file_input = gr.File(label="Upload JSON File", file_types=[".json"])
            file_info = gr.Textbox(label="File", value="No file selected", interactive=False)

            gr.Markdown("### 2. Ref-Config (optional)")
            ref_config_input = gr.File(label="Upload Ref-Config", file_types=[".json"])
            ref_config_info = gr.Textbox(label="Ref-Config", value="No ref-config file selected", interactive=False)

            gr.Markdown("### 3. Generate")
            process_btn = gr.Button("Process Schema", variant="primary", interactive=False)
            status_msg = gr.Textbox(label="Status", interactive=False)

        # Right Panel: Output
        with gr.Column(scale=2):
            gr.Markdown("### 4. Schema")
            output_display = gr.Code(label="Generated Schema", language="json", interactive=False)
            download_output = gr.File(label="Download Schema")

    file_input.change(
        fn=handle_corpus_upload,
        inputs=[file_input],
        outputs=[file_info, process_btn],
    )

    ref_config_input.change(
        fn=handle_ref_config_upload,
        inputs=[ref_config_input],
        outputs=[ref_config_state, ref_config_info, status_msg],
    )

    process_btn.click(
        fn=process_schema_handler,
        inputs=[file_input, ref_config_state],
        outputs=[output_display, download_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch()
